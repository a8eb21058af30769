# src/praxis_engine/__init__.py
"""
Praxis Engine — engine lógico e reativo orientado a regras.

Aplicações descrevem seu comportamento como regras (que reagem a eventos,
mutam o context e produzem fatos) e constraints (invariantes avaliadas
após as regras). O engine avalia tudo de forma síncrona e determinística,
convertendo falhas em diagnósticos em vez de exceções.

Arquitetura em alto nível:
    - core.rules         → descritores e registry
    - core.engine        → engine discreto (`step`)
    - core.reactive      → engine reativo (`apply`, `subscribe`, `derived`)
    - core.actors        → actors com efeitos colaterais (timers, I/O)
    - core.introspection → schema, grafo e exportação DOT/Mermaid
    - dsl                → helpers de definição

Limites explícitos:
    - Não persiste estado
    - Não implementa transporte de rede nem consenso distribuído
    - Não renderiza UI
"""

from .core.actors import Actor, ActorManager, TimerActor, create_timer_actor
from .core.config import compute_config_hash, load_config
from .core.engine import LogicEngine, create_praxis_engine
from .core.exceptions import (
    ActorAlreadyStartedError,
    ActorNotAttachedError,
    ActorNotFoundError,
    ActorNotificationError,
    ActorStateError,
    DuplicateIdError,
    PraxisException,
    SchemaFormatError,
)
from .core.introspection import RegistryIntrospector, create_introspector, load_schema
from .core.journal import EngineJournal
from .core.protocol import (
    PROTOCOL_VERSION,
    Diagnostic,
    DiagnosticKind,
    Event,
    Fact,
    PraxisState,
    StepConfig,
    StepResult,
)
from .core.reactive import Derived, ReactiveLogicEngine, create_reactive_engine
from .core.rules import ConstraintDescriptor, PraxisModule, PraxisRegistry, RuleDescriptor
from .dsl import (
    define_constraint,
    define_event,
    define_fact,
    define_module,
    define_rule,
    filter_events,
    filter_facts,
    find_event,
    find_fact,
)

__version__ = "0.1.0"

__all__ = [
    "PROTOCOL_VERSION",
    "Actor",
    "ActorAlreadyStartedError",
    "ActorManager",
    "ActorNotAttachedError",
    "ActorNotFoundError",
    "ActorNotificationError",
    "ActorStateError",
    "ConstraintDescriptor",
    "Derived",
    "Diagnostic",
    "DiagnosticKind",
    "DuplicateIdError",
    "EngineJournal",
    "Event",
    "Fact",
    "LogicEngine",
    "PraxisException",
    "PraxisModule",
    "PraxisRegistry",
    "PraxisState",
    "ReactiveLogicEngine",
    "RegistryIntrospector",
    "RuleDescriptor",
    "SchemaFormatError",
    "StepConfig",
    "StepResult",
    "TimerActor",
    "compute_config_hash",
    "create_introspector",
    "create_praxis_engine",
    "create_reactive_engine",
    "create_timer_actor",
    "define_constraint",
    "define_event",
    "define_fact",
    "define_module",
    "define_rule",
    "filter_events",
    "filter_facts",
    "find_event",
    "find_fact",
    "load_config",
    "load_schema",
    "__version__",
]
