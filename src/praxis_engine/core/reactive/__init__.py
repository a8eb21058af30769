# src/praxis_engine/core/reactive/__init__.py
"""
Engine reativo do Praxis Engine.

Componentes:
    - tracking → contêineres rastreados e canal de mudanças
    - engine   → `ReactiveLogicEngine`, `Derived` e a factory
                 `create_reactive_engine`

Invariantes:
    - Um `apply()` com mudanças gera exatamente uma notificação de estado
    - Escritas com o mesmo valor não notificam
    - Derivados só notificam quando o valor selecionado muda
"""

from .engine import Derived, ReactiveLogicEngine, create_reactive_engine
from .tracking import ReactiveDict, ReactiveList, ReactiveState, same_value, unwrap

__all__ = [
    "Derived",
    "ReactiveDict",
    "ReactiveList",
    "ReactiveLogicEngine",
    "ReactiveState",
    "create_reactive_engine",
    "same_value",
    "unwrap",
]
