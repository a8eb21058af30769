# src/praxis_engine/core/snapshot.py
"""
Cópias isoladas de estado.

O engine nunca entrega a referência viva do context a chamadores. Este
módulo concentra a política de cópia:

- tentativa de cópia profunda (`copy.deepcopy`)
- se o valor contém membros não copiáveis (locks, handles de timer,
  sockets...), cópia rasa do contêiner: membros copiáveis são copiados
  profundamente e os demais são preservados por referência

Nenhuma exceção de cópia atravessa este módulo: o engine nunca falha
apenas porque o context carrega um valor não clonável.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping


def _clone_or_ref(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except Exception:
        return value


def safe_clone(value: Any) -> Any:
    """Retorna uma cópia isolada de `value` (profunda sempre que possível)."""
    try:
        return copy.deepcopy(value)
    except Exception:
        pass

    if isinstance(value, Mapping):
        return {k: _clone_or_ref(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_clone_or_ref(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_clone_or_ref(v) for v in value)
    if isinstance(value, set):
        return {_clone_or_ref(v) for v in value}

    try:
        return copy.copy(value)
    except Exception:
        # objeto opaco e não copiável: preservado por referência
        return value
