# src/praxis_engine/core/rules/__init__.py
"""
# Rules Core — Praxis Engine

Este pacote define os descritores canônicos de regras e constraints e o
registro (`PraxisRegistry`) que os engines consomem.

## Componentes

- **descriptors**
  - `RuleDescriptor`: regra `(state, events) -> facts`
  - `ConstraintDescriptor`: constraint `state -> True | False | str`
  - `PraxisModule`: pacote nomeado de regras + constraints + meta

- **registry**
  - `PraxisRegistry`: unicidade de ids e ordem de registro

## Invariantes

- Ids são únicos por namespace (regras, constraints, módulos)
- Ordem de registro = ordem de avaliação
- Registro é append-only após o setup
"""

from .descriptors import ConstraintDescriptor, ConstraintFn, PraxisModule, RuleDescriptor, RuleFn
from .registry import PraxisRegistry

__all__ = [
    "ConstraintDescriptor",
    "ConstraintFn",
    "PraxisModule",
    "PraxisRegistry",
    "RuleDescriptor",
    "RuleFn",
]
