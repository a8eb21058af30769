# src/praxis_engine/core/actors/manager.py
"""
Actors e gerenciamento de ciclo de vida.

Actors são unidades com efeitos colaterais (timers, I/O, integrações) que
observam o estado do engine e devolvem eventos a ele. Este módulo define:

    - Actor        → descritor com hooks opcionais `on_start`, `on_stop`
                     e `on_state_change`
    - ActorManager → registro, start/stop e notificação de actors

Hooks podem ser funções síncronas ou corrotinas; o manager aguarda o
resultado quando ele é awaitable.

Decisões arquiteturais:
    - Um actor só é considerado ativo depois que `on_start` termina
    - `stop` retira o actor do conjunto ativo antes de aguardar `on_stop`
    - `stop` durante `on_start` espera o start terminar e o desfaz
      (roda `on_stop`, o actor não é ativado)
    - Falhas em `on_state_change` não interrompem a notificação dos demais;
      são registradas no journal e reportadas em conjunto ao final
    - `actors.<id>.enabled: false` exclui o actor de `start_all`

Invariantes:
    - Ids de actors são únicos por manager
    - Apenas actors ativos recebem `on_state_change`
    - Nenhum actor inicia sem engine anexado
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Tuple, Union

from praxis_engine.core.config.loader import is_enabled
from praxis_engine.core.exceptions import (
    ActorAlreadyStartedError,
    ActorNotAttachedError,
    ActorNotFoundError,
    ActorNotificationError,
    ActorStateError,
    DuplicateIdError,
)
from praxis_engine.core.journal import EngineJournal

Hook = Callable[..., Union[None, Awaitable[None]]]


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass
class Actor:
    """
    Descritor de actor.

    Campos:
        - id: identificador único no manager
        - description: descrição legível
        - on_start: `(engine) -> None | Awaitable[None]`
        - on_stop: `() -> None | Awaitable[None]`
        - on_state_change: `(state, engine) -> None | Awaitable[None]`
    """

    id: str
    description: str = ""
    on_start: Optional[Hook] = None
    on_stop: Optional[Hook] = None
    on_state_change: Optional[Hook] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("actor.id must be a non-empty string")


class ActorManager:
    """Gerencia o ciclo de vida dos actors ligados a um engine."""

    def __init__(self, *, config: Optional[Dict[str, Any]] = None, journal: Optional[EngineJournal] = None):
        self.config: Dict[str, Any] = dict(config or {})
        self.journal: EngineJournal = journal or EngineJournal.from_config(self.config)

        self._actors: Dict[str, Any] = {}
        self._active: Dict[str, None] = {}
        self._starting: Dict[str, "asyncio.Future[None]"] = {}
        self._stop_requested: Set[str] = set()
        self._engine: Any = None

    # -----------------------------
    # Registro
    # -----------------------------
    def register(self, actor: Any) -> None:
        actor_id = getattr(actor, "id", None)
        if not isinstance(actor_id, str) or not actor_id.strip():
            raise ValueError("actor.id must be a non-empty string")
        if actor_id in self._actors:
            raise DuplicateIdError(
                f'Actor with id "{actor_id}" already registered',
                details={"kind": "actor", "id": actor_id},
            )
        self._actors[actor_id] = actor

    def unregister(self, actor_id: str) -> None:
        if actor_id in self._active or actor_id in self._starting:
            raise ActorStateError(
                f'Cannot unregister active actor "{actor_id}". Stop it first.',
                details={"id": actor_id},
                hint="Chame `await manager.stop(actor_id)` antes de remover o actor",
            )
        self._actors.pop(actor_id, None)

    def attach_engine(self, engine: Any) -> None:
        self._engine = engine

    @property
    def engine(self) -> Any:
        return self._engine

    def _get(self, actor_id: str) -> Any:
        actor = self._actors.get(actor_id)
        if actor is None:
            raise ActorNotFoundError(f'Actor "{actor_id}" not found', details={"id": actor_id})
        return actor

    # -----------------------------
    # Ciclo de vida
    # -----------------------------
    async def start(self, actor_id: str) -> None:
        actor = self._get(actor_id)
        if actor_id in self._active or actor_id in self._starting:
            raise ActorAlreadyStartedError(f'Actor "{actor_id}" is already started', details={"id": actor_id})
        if self._engine is None:
            raise ActorNotAttachedError(
                "Actor manager not attached to an engine",
                details={"id": actor_id},
                hint="Chame `manager.attach_engine(engine)` antes de iniciar actors",
            )

        settled: "asyncio.Future[None]" = asyncio.get_running_loop().create_future()
        self._starting[actor_id] = settled
        try:
            try:
                on_start = getattr(actor, "on_start", None)
                if on_start is not None:
                    await _maybe_await(on_start(self._engine))
            except Exception as e:
                self.journal.log(
                    source_id=actor_id,
                    level="ERROR",
                    message=f"Error starting actor: {e}",
                    exception_class=e.__class__.__name__,
                )
                raise

            # stop() chamado durante on_start: desfaz o start sem ativar
            if actor_id in self._stop_requested:
                self.journal.log(source_id=actor_id, level="INFO", message="actor stopped before activation")
                await self._run_on_stop(actor_id, actor)
                return

            self._active[actor_id] = None
            self.journal.log(source_id=actor_id, level="INFO", message="actor started")
        finally:
            self._stop_requested.discard(actor_id)
            del self._starting[actor_id]
            if not settled.done():
                settled.set_result(None)

    async def stop(self, actor_id: str) -> None:
        """
        Para o actor e aguarda `on_stop`.

        Se o actor ainda está em `on_start`, o stop é registrado e esta
        chamada só retorna depois que o start pendente terminou e foi
        desfeito (o actor nunca chega a ficar ativo).
        """
        actor = self._get(actor_id)
        settled = self._starting.get(actor_id)
        if settled is not None:
            self._stop_requested.add(actor_id)
            await asyncio.shield(settled)
            return
        if actor_id not in self._active:
            return

        del self._active[actor_id]
        await self._run_on_stop(actor_id, actor)

    async def _run_on_stop(self, actor_id: str, actor: Any) -> None:
        on_stop = getattr(actor, "on_stop", None)
        if on_stop is not None:
            await _maybe_await(on_stop())
        self.journal.log(source_id=actor_id, level="INFO", message="actor stopped")

    async def start_all(self) -> None:
        """Inicia, em ordem de registro, todos os actors habilitados e inativos."""
        for actor_id in list(self._actors):
            if actor_id in self._active or actor_id in self._starting:
                continue
            if not is_enabled(self.config, "actors", actor_id):
                self.journal.log(source_id=actor_id, level="DEBUG", message="skipped by config", section="actors")
                continue
            await self.start(actor_id)

    async def stop_all(self) -> None:
        """Para os actors ativos e os que ainda estão em `on_start`."""
        for actor_id in list(self._active) + list(self._starting):
            await self.stop(actor_id)

    # -----------------------------
    # Notificação
    # -----------------------------
    async def notify_state_change(self, state: Any) -> None:
        """
        Entrega `state` a todos os actors ativos.

        Sem engine anexado, não faz nada. Hooks assíncronos são aguardados
        concorrentemente; se algum falhar, todos os demais ainda são
        notificados e `ActorNotificationError` é levantada ao final.
        """
        if self._engine is None:
            return

        failures: List[Tuple[str, BaseException]] = []
        pending_ids: List[str] = []
        pending: List[Awaitable[Any]] = []

        for actor_id in list(self._active):
            hook = getattr(self._actors[actor_id], "on_state_change", None)
            if hook is None:
                continue
            try:
                result = hook(state, self._engine)
            except Exception as e:
                failures.append((actor_id, e))
                continue
            if inspect.isawaitable(result):
                pending_ids.append(actor_id)
                pending.append(result)

        if pending:
            results = await asyncio.gather(*pending, return_exceptions=True)
            for actor_id, outcome in zip(pending_ids, results):
                if isinstance(outcome, Exception):
                    failures.append((actor_id, outcome))
                elif isinstance(outcome, BaseException):
                    raise outcome

        if not failures:
            return

        for actor_id, exc in failures:
            self.journal.log(
                source_id=actor_id,
                level="ERROR",
                message=f"Error in actor state change: {exc}",
                exception_class=exc.__class__.__name__,
            )
        raise ActorNotificationError(
            f"{len(failures)} actor(s) failed to handle state change",
            details={"errors": {actor_id: str(exc) for actor_id, exc in failures}},
        ) from failures[0][1]

    # -----------------------------
    # Consulta
    # -----------------------------
    def get_actor_ids(self) -> List[str]:
        return list(self._actors)

    def get_active_actor_ids(self) -> List[str]:
        return list(self._active)

    def is_active(self, actor_id: str) -> bool:
        return actor_id in self._active
