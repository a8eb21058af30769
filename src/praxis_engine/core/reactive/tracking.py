# src/praxis_engine/core/reactive/tracking.py
"""
Contêineres com rastreamento de mudanças (change tracking).

Este módulo fornece a camada de observação usada pelo engine reativo:
cada contêiner mutável do estado (dict, list e o próprio estado raiz) é
envolvido por um wrapper que

    - registra leituras no escopo de rastreamento corrente (dependências
      de valores derivados)
    - publica escritas em um canal de mudanças compartilhado

Componentes:
    - ChangeChannel → canal compartilhado: batches, escopos de leitura,
      conjunto de escritas pendentes e flush
    - ReactiveDict  → MutableMapping rastreado
    - ReactiveList  → MutableSequence rastreada
    - ReactiveState → raiz com `context`, `facts` e `meta` rastreados
    - same_value    → igualdade por identidade/valor (estilo `Object.is`)
    - wrap / unwrap → conversão entre estruturas puras e rastreadas

Decisões arquiteturais:
    - Apenas dict e list (recursivamente) são rastreados; outros objetos
      são armazenados como vieram e mutações internas neles não são vistas
    - Uma escrita que mantém o mesmo valor (`same_value`) não é mudança
    - Dependências são pares (id do contêiner, chave); operações
      estruturais (len, iteração, inserção, remoção) usam a chave `STRUCTURE`
    - Listas são rastreadas como um todo (qualquer escrita toca `STRUCTURE`)

Invariantes:
    - Toda escrita efetiva fica pendente até o fim do batch mais externo
    - Fora de um batch, cada escrita é publicada imediatamente
    - Um flush publica o conjunto de escritas exatamente uma vez
"""

from __future__ import annotations

import copy
import math
from collections.abc import MutableMapping, MutableSequence, Sequence
from contextlib import contextmanager
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Hashable, Iterator, List, Optional, Set, Tuple

# Chave sintética para leituras/escritas estruturais (len, iteração, add/remove).
STRUCTURE = "<structure>"

Dependency = Tuple[int, Hashable]

_ATOMIC_TYPES = (type(None), bool, int, float, complex, str, bytes, Decimal, Enum, tuple, frozenset)


def same_value(a: Any, b: Any) -> bool:
    """
    Igualdade usada para decidir "mudou ou não".

    - mesmo objeto → igual
    - valores atômicos/imutáveis do mesmo tipo → comparação por valor
      (NaN é igual a NaN)
    - contêineres e objetos → apenas identidade (conteúdo igual em nova
      referência conta como mudança)
    """
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _ATOMIC_TYPES):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    try:
        return bool(a == b)
    except Exception:
        return False


class ChangeChannel:
    """Canal compartilhado pelos contêineres de um mesmo estado reativo."""

    def __init__(self, on_flush: Optional[Callable[[FrozenSet[Dependency]], None]] = None):
        self.on_flush = on_flush
        self._depth = 0
        self._pending: Set[Dependency] = set()
        self._scopes: List[Set[Dependency]] = []

    @property
    def in_batch(self) -> bool:
        return self._depth > 0

    def record_read(self, owner: Any, key: Hashable) -> None:
        if self._scopes:
            self._scopes[-1].add((id(owner), key))

    def record_write(self, owner: Any, *keys: Hashable) -> None:
        for key in keys:
            self._pending.add((id(owner), key))
        if self._depth == 0:
            self.flush()

    @contextmanager
    def batch(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            if self._depth == 0:
                self.flush()

    @contextmanager
    def tracking(self) -> Iterator[Set[Dependency]]:
        scope: Set[Dependency] = set()
        self._scopes.append(scope)
        try:
            yield scope
        finally:
            self._scopes.pop()

    def flush(self) -> None:
        if not self._pending:
            return
        writes = frozenset(self._pending)
        self._pending.clear()
        if self.on_flush is not None:
            self.on_flush(writes)


def wrap(value: Any, channel: ChangeChannel) -> Any:
    """Converte dicts/lists (recursivamente) em contêineres rastreados."""
    if isinstance(value, (ReactiveDict, ReactiveList)):
        if value._channel is channel:
            return value
        return wrap(unwrap(value), channel)
    if isinstance(value, dict):
        return ReactiveDict(channel, value)
    if isinstance(value, list):
        return ReactiveList(channel, value)
    return value


def unwrap(value: Any) -> Any:
    """
    Converte contêineres rastreados em dicts/lists puros (novas instâncias).

    A conversão lê todo o conteúdo: dentro de um escopo de rastreamento,
    cada contêiner visitado registra `STRUCTURE` e cada chave lida.
    """
    if isinstance(value, ReactiveDict):
        channel = value._channel
        channel.record_read(value, STRUCTURE)
        plain = {}
        for key, item in value._data.items():
            channel.record_read(value, key)
            plain[key] = unwrap(item)
        return plain
    if isinstance(value, ReactiveList):
        value._channel.record_read(value, STRUCTURE)
        return [unwrap(v) for v in value._items]
    return value


class ReactiveDict(MutableMapping):
    """Mapa rastreado: leituras viram dependências, escritas viram mudanças."""

    def __init__(self, channel: ChangeChannel, data: Optional[Dict[Any, Any]] = None):
        self._channel = channel
        self._data: Dict[Any, Any] = {k: wrap(v, channel) for k, v in (data or {}).items()}

    def __getitem__(self, key: Any) -> Any:
        self._channel.record_read(self, key)
        return self._data[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        existed = key in self._data
        if existed and same_value(self._data[key], value):
            return
        self._data[key] = wrap(value, self._channel)
        if existed:
            self._channel.record_write(self, key)
        else:
            self._channel.record_write(self, key, STRUCTURE)

    def __delitem__(self, key: Any) -> None:
        del self._data[key]
        self._channel.record_write(self, key, STRUCTURE)

    def __iter__(self) -> Iterator[Any]:
        self._channel.record_read(self, STRUCTURE)
        return iter(self._data)

    def __len__(self) -> int:
        self._channel.record_read(self, STRUCTURE)
        return len(self._data)

    def clear(self) -> None:
        if not self._data:
            return
        keys = list(self._data)
        self._data.clear()
        self._channel.record_write(self, STRUCTURE, *keys)

    def __repr__(self) -> str:
        return f"ReactiveDict({self._data!r})"

    def __copy__(self) -> Dict[Any, Any]:
        return dict(self.items())

    def __deepcopy__(self, memo: Dict[int, Any]) -> Dict[Any, Any]:
        return copy.deepcopy(unwrap(self), memo)

    def to_plain(self) -> Dict[Any, Any]:
        return unwrap(self)


class ReactiveList(MutableSequence):
    """Lista rastreada como um todo (qualquer escrita toca `STRUCTURE`)."""

    def __init__(self, channel: ChangeChannel, items: Optional[List[Any]] = None):
        self._channel = channel
        self._items: List[Any] = [wrap(v, channel) for v in (items or [])]

    def _touch(self) -> None:
        self._channel.record_write(self, STRUCTURE)

    def __getitem__(self, index: Any) -> Any:
        self._channel.record_read(self, STRUCTURE)
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._items[index] = [wrap(v, self._channel) for v in value]
            self._touch()
            return
        if same_value(self._items[index], value):
            return
        self._items[index] = wrap(value, self._channel)
        self._touch()

    def __delitem__(self, index: Any) -> None:
        del self._items[index]
        self._touch()

    def __len__(self) -> int:
        self._channel.record_read(self, STRUCTURE)
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        self._channel.record_read(self, STRUCTURE)
        return iter(self._items)

    def insert(self, index: int, value: Any) -> None:
        self._items.insert(index, wrap(value, self._channel))
        self._touch()

    def append(self, value: Any) -> None:
        self._items.append(wrap(value, self._channel))
        self._touch()

    def extend(self, values: Any) -> None:
        new_items = [wrap(v, self._channel) for v in values]
        if not new_items:
            return
        self._items.extend(new_items)
        self._touch()

    def clear(self) -> None:
        if not self._items:
            return
        self._items.clear()
        self._touch()

    def sort(self, *, key: Optional[Callable[[Any], Any]] = None, reverse: bool = False) -> None:
        if len(self._items) < 2:
            return
        self._items.sort(key=key, reverse=reverse)
        self._touch()

    def reverse(self) -> None:
        if len(self._items) < 2:
            return
        self._items.reverse()
        self._touch()

    def __eq__(self, other: Any) -> bool:
        self._channel.record_read(self, STRUCTURE)
        if isinstance(other, ReactiveList):
            other._channel.record_read(other, STRUCTURE)
            return self._items == other._items
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes, bytearray)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ReactiveList({self._items!r})"

    def __copy__(self) -> List[Any]:
        return list(self)

    def __deepcopy__(self, memo: Dict[int, Any]) -> List[Any]:
        return copy.deepcopy(unwrap(self), memo)

    def to_plain(self) -> List[Any]:
        return unwrap(self)


class ReactiveState:
    """Raiz rastreada do estado reativo: `context`, `facts` e `meta`."""

    _FIELDS = ("context", "facts", "meta")

    def __init__(self, channel: ChangeChannel, *, context: Any, facts: Any, meta: Any):
        self._channel = channel
        self._values: Dict[str, Any] = {
            "context": wrap(context, channel),
            "facts": wrap(facts, channel),
            "meta": wrap(meta, channel),
        }

    def _get(self, name: str) -> Any:
        self._channel.record_read(self, name)
        return self._values[name]

    def _set(self, name: str, value: Any) -> None:
        if same_value(self._values[name], value):
            return
        self._values[name] = wrap(value, self._channel)
        self._channel.record_write(self, name)

    @property
    def context(self) -> Any:
        return self._get("context")

    @context.setter
    def context(self, value: Any) -> None:
        self._set("context", value)

    @property
    def facts(self) -> Any:
        return self._get("facts")

    @facts.setter
    def facts(self, value: Any) -> None:
        self._set("facts", value)

    @property
    def meta(self) -> Any:
        return self._get("meta")

    @meta.setter
    def meta(self, value: Any) -> None:
        self._set("meta", value)

    def to_plain(self) -> Dict[str, Any]:
        return {name: unwrap(self._get(name)) for name in self._FIELDS}

    def __repr__(self) -> str:
        return f"ReactiveState({self._values!r})"
