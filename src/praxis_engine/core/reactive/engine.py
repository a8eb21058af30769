# src/praxis_engine/core/reactive/engine.py
"""
Engine reativo do Praxis Engine.

O `ReactiveLogicEngine` mantém o estado em contêineres rastreados
(`ReactiveState`) e notifica observadores quando mutações efetivas
acontecem.

Fluxo:
    1. `apply(mutator)` abre um batch e executa `mutator(state)`
    2. Escritas efetivas acumulam no canal de mudanças
    3. Ao fim do batch mais externo (mesmo que o mutator lance),
       os subscribers do estado são notificados uma única vez
    4. Em seguida os `Derived` cujas dependências foram escritas
       são recalculados e notificam apenas se o valor mudou

Guardrails:
    - Erros em subscribers, callbacks de derivados ou seletores
      (no recálculo) são registrados no journal em ERROR e nunca relançados
    - Escritas fora de `apply` são publicadas imediatamente
    - `snapshot()` devolve um `PraxisState` puro e isolado

Este engine não avalia regras: ele é a base observável sobre a qual
regras, actors e interfaces reagem.
"""

from __future__ import annotations

from itertools import count
from typing import Any, Callable, Dict, FrozenSet, Generic, Iterable, List, Optional, TypeVar

from praxis_engine.core.journal import EngineJournal
from praxis_engine.core.protocol import PraxisState
from praxis_engine.core.reactive.tracking import ChangeChannel, Dependency, ReactiveState, same_value
from praxis_engine.core.snapshot import safe_clone

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class Derived(Generic[T]):
    """
    Valor derivado memoizado de um `ReactiveLogicEngine`.

    O seletor é executado dentro de um escopo de rastreamento; as leituras
    feitas por ele formam o conjunto de dependências usado para decidir se
    um flush exige recálculo.
    """

    def __init__(self, engine: "ReactiveLogicEngine", selector: Callable[[ReactiveState], T]):
        self._engine = engine
        self._selector = selector
        self._subscribers: Dict[int, Callable[[T], Any]] = {}
        self._tokens = count()
        self._deps: FrozenSet[Dependency] = frozenset()
        self._value: T = self._compute()

    def _compute(self) -> T:
        with self._engine._channel.tracking() as scope:
            value = self._selector(self._engine._state)
        self._deps = frozenset(scope)
        return value

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, callback: Callable[[T], Any]) -> Unsubscribe:
        """Chama `callback(value)` agora e a cada mudança do valor derivado."""
        self._engine._safe_call(callback, self._value, source_id="derived")
        token = next(self._tokens)
        self._subscribers[token] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def dispose(self) -> None:
        """Desliga o derivado do engine; ele deixa de ser recalculado."""
        self._subscribers.clear()
        self._engine._detach(self)

    def _refresh(self, writes: FrozenSet[Dependency]) -> None:
        if self._deps and self._deps.isdisjoint(writes):
            return
        try:
            new_value = self._compute()
        except Exception as e:
            self._engine.journal.log(
                source_id="derived",
                level="ERROR",
                message=f"Error recomputing derived value: {e}",
                exception_class=e.__class__.__name__,
            )
            return
        if same_value(new_value, self._value):
            return
        self._value = new_value
        for callback in list(self._subscribers.values()):
            self._engine._safe_call(callback, new_value, source_id="derived")


class ReactiveLogicEngine:
    """Engine com estado observável, batches de mutação e valores derivados."""

    def __init__(
        self,
        *,
        initial_context: Any,
        initial_facts: Optional[Iterable[Any]] = None,
        initial_meta: Optional[Dict[str, Any]] = None,
        config: Optional[Dict[str, Any]] = None,
        journal: Optional[EngineJournal] = None,
    ):
        self.config: Dict[str, Any] = dict(config or {})
        self.journal: EngineJournal = journal or EngineJournal.from_config(self.config)

        self._channel = ChangeChannel(on_flush=self._on_flush)
        self._state = ReactiveState(
            self._channel,
            context=initial_context,
            facts=list(initial_facts or []),
            meta=dict(initial_meta or {}),
        )
        self._subscribers: Dict[int, Callable[[ReactiveState], Any]] = {}
        self._tokens = count()
        self._derived: List[Derived[Any]] = []

    # ------------------------------------------------------------------
    # Estado vivo
    # ------------------------------------------------------------------
    @property
    def state(self) -> ReactiveState:
        return self._state

    @property
    def context(self) -> Any:
        return self._state.context

    @property
    def facts(self) -> Any:
        return self._state.facts

    @property
    def meta(self) -> Any:
        return self._state.meta

    def snapshot(self) -> PraxisState:
        """Cópia pura e isolada do estado atual."""
        plain = self._state.to_plain()
        return PraxisState(
            context=safe_clone(plain["context"]),
            facts=safe_clone(plain["facts"]),
            meta=safe_clone(plain["meta"]),
        )

    # ------------------------------------------------------------------
    # Mutação
    # ------------------------------------------------------------------
    def apply(self, mutator: Callable[[ReactiveState], Any]) -> None:
        """
        Executa `mutator(state)` como um batch.

        Chamadas aninhadas pertencem ao batch externo. Se o mutator lançar,
        as escritas já feitas são publicadas e a exceção é relançada.
        """
        with self._channel.batch():
            mutator(self._state)

    # ------------------------------------------------------------------
    # Observação
    # ------------------------------------------------------------------
    def subscribe(self, callback: Callable[[ReactiveState], Any]) -> Unsubscribe:
        """Chama `callback(state)` agora e após cada batch com mudanças."""
        self._safe_call(callback, self._state, source_id="subscriber")
        token = next(self._tokens)
        self._subscribers[token] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def derived(self, selector: Callable[[ReactiveState], T]) -> Derived[T]:
        """Cria um valor derivado; erros do seletor na criação são propagados."""
        item: Derived[T] = Derived(self, selector)
        self._derived.append(item)
        return item

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------
    def _detach(self, item: Derived[Any]) -> None:
        if item in self._derived:
            self._derived.remove(item)

    def _on_flush(self, writes: FrozenSet[Dependency]) -> None:
        for callback in list(self._subscribers.values()):
            self._safe_call(callback, self._state, source_id="subscriber")
        for item in list(self._derived):
            item._refresh(writes)

    def _safe_call(self, callback: Callable[[Any], Any], value: Any, *, source_id: str) -> None:
        try:
            callback(value)
        except Exception as e:
            self.journal.log(
                source_id=source_id,
                level="ERROR",
                message=f"Error in {source_id} callback: {e}",
                exception_class=e.__class__.__name__,
            )


def create_reactive_engine(
    *,
    initial_context: Any,
    initial_facts: Optional[Iterable[Any]] = None,
    initial_meta: Optional[Dict[str, Any]] = None,
    config: Optional[Dict[str, Any]] = None,
    journal: Optional[EngineJournal] = None,
) -> ReactiveLogicEngine:
    return ReactiveLogicEngine(
        initial_context=initial_context,
        initial_facts=initial_facts,
        initial_meta=initial_meta,
        config=config,
        journal=journal,
    )
