# src/praxis_engine/core/actors/__init__.py
"""
Actors do Praxis Engine.

Actors fazem a ponte entre a lógica pura e o mundo com efeitos: observam o
estado, executam I/O e devolvem eventos ao engine.

Componentes:
    - manager → `Actor`, `ActorManager`
    - timer   → `TimerActor`, `create_timer_actor`
"""

from .manager import Actor, ActorManager
from .timer import TimerActor, create_timer_actor

__all__ = ["Actor", "ActorManager", "TimerActor", "create_timer_actor"]
