# src/praxis_engine/core/config/__init__.py
"""
Camada de configuração do Praxis Engine.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar configurações do engine.

A configuração no Praxis Engine é:
    - declarativa
    - determinística
    - explicitamente versionável
    - separada das regras e constraints registradas

Chaves consumidas pelo core:
    - engine.log_level           → nível mínimo do EngineJournal
    - engine.max_journal_events  → limite de eventos retidos no journal
    - rules.<id>.enabled         → exclui a regra de `step()`
    - constraints.<id>.enabled   → exclui a constraint de `step()`
    - actors.<id>.enabled        → exclui o actor de `start_all()`

Limites explícitos:
    - Não valida semântica de regras ou context
    - Não executa o engine
    - Não depende de UI ou adapters

Este pacote existe para garantir previsibilidade,
rastreabilidade e segurança na resolução de configuração.
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSwitchError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_hash
from .loader import is_enabled, load_config
from .merge import deep_merge, validate_switches

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSwitchError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "compute_hash",
    "deep_merge",
    "is_enabled",
    "load_config",
    "validate_switches",
]
