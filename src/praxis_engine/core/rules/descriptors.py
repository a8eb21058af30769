# src/praxis_engine/core/rules/descriptors.py
"""
Descritores canônicos de regras, constraints e módulos.

Este módulo define as estruturas declarativas que o `PraxisRegistry`
armazena e que os engines avaliam.

Uma regra é a menor unidade de lógica reativa do engine: recebe o estado
corrente e os eventos do step, pode mutar `state.context` e retorna zero
ou mais fatos. Uma constraint apenas avalia o estado pós-regras e retorna
`True` (ok), `False` (violação genérica) ou uma mensagem (violação).

Princípios fundamentais:
    - Regras e constraints não conhecem o engine nem o registry
    - Regras e constraints não controlam ordem de avaliação
    - Descritores são imutáveis após a criação (frozen)

Invariantes:
    - `id` é uma string não vazia
    - `impl` é chamável
    - `meta` é um mapa livre de anotações (ex.: depends_on, constrains)

Limites explícitos:
    - Não avalia regras ou constraints
    - Não valida o formato dos fatos retornados

Este módulo existe para garantir desacoplamento,
clareza contratual e testabilidade de regras e constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..protocol import PraxisState

# (state, events) -> fatos (iterável; None é aceito como "nenhum fato")
RuleFn = Callable[[PraxisState, Sequence[Any]], Optional[Iterable[Any]]]

# state -> True | False | mensagem de violação
ConstraintFn = Callable[[PraxisState], Union[bool, str]]


def _validate_descriptor(kind: str, descriptor_id: Any, impl: Any) -> None:
    if not isinstance(descriptor_id, str) or not descriptor_id.strip():
        raise ValueError(f"{kind}.id must be a non-empty string")
    if not callable(impl):
        raise TypeError(f"{kind}.impl must be callable (id={descriptor_id!r})")


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Descritor imutável de uma regra.

    Campos:
        - id: identificador único e estável da regra
        - description: descrição humana
        - impl: função `(state, events) -> facts`
        - meta: anotações livres (ex.: `depends_on` para introspecção)
    """
    id: str
    description: str
    impl: RuleFn
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_descriptor("rule", self.id, self.impl)


@dataclass(frozen=True)
class ConstraintDescriptor:
    """
    Descritor imutável de uma constraint.

    Constraints não devem mutar o context: apenas avaliam o estado
    produzido pela fase de regras.
    """
    id: str
    description: str
    impl: ConstraintFn
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_descriptor("constraint", self.id, self.impl)


@dataclass(frozen=True)
class PraxisModule:
    """
    Pacote nomeado de regras e constraints registrado de forma atômica.

    `meta` é compartilhado pelo módulo (ex.: versão, domínio) e fica
    disponível via `PraxisRegistry.get_modules()`.
    """
    rules: List[RuleDescriptor] = field(default_factory=list)
    constraints: List[ConstraintDescriptor] = field(default_factory=list)
    name: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
