# src/praxis_engine/core/rules/registry.py
"""
Registro estrutural de regras e constraints.

Este módulo define o `PraxisRegistry`, responsável por registrar
descritores de regras e constraints e validar a unicidade de seus
identificadores antes de qualquer avaliação.

O registry atua como uma camada de proteção antecipada, garantindo que:
    - cada descritor possua um identificador válido
    - não existam identificadores duplicados
    - a ordem de registro seja preservada (ela define a ordem de avaliação)

Decisões arquiteturais:
    - Regras e constraints vivem em namespaces de id separados
    - Duplicidade é tratada como falha fatal (exceção), nunca como warning
    - Módulos são registrados atomicamente: a validação de todos os ids
      ocorre antes de qualquer armazenamento
    - Não existe API de atualização ou remoção

Invariantes:
    - Cada id é único dentro do seu namespace
    - A iteração reflete exatamente a ordem de registro
    - Uma chamada que falha não deixa estado parcial

Limites explícitos:
    - Não avalia regras nem constraints
    - Não interage com engines ou actors

Este módulo existe para garantir integridade estrutural,
previsibilidade e segurança na definição da lógica da aplicação.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import DuplicateIdError
from .descriptors import ConstraintDescriptor, PraxisModule, RuleDescriptor


def _find_duplicates(ids: Iterable[str], existing: Dict[str, Any]) -> Optional[str]:
    seen = set()
    for item_id in ids:
        if item_id in existing or item_id in seen:
            return item_id
        seen.add(item_id)
    return None


@dataclass
class PraxisRegistry:
    """
    Registro canônico de regras e constraints.

    O dicionário interno preserva a ordem de inserção, que é a ordem de
    avaliação usada pelos engines.
    """

    _rules: Dict[str, RuleDescriptor] = field(default_factory=dict, init=False, repr=False)
    _constraints: Dict[str, ConstraintDescriptor] = field(default_factory=dict, init=False, repr=False)
    _modules: Dict[str, PraxisModule] = field(default_factory=dict, init=False, repr=False)
    _module_count: int = field(default=0, init=False, repr=False)

    # -----------------------------
    # Registro
    # -----------------------------
    def register_rule(self, descriptor: RuleDescriptor) -> None:
        if descriptor.id in self._rules:
            raise DuplicateIdError(
                f'Rule with id "{descriptor.id}" already registered',
                details={"kind": "rule", "id": descriptor.id},
                hint="Use um id estável e único por regra",
            )
        self._rules[descriptor.id] = descriptor

    def register_constraint(self, descriptor: ConstraintDescriptor) -> None:
        if descriptor.id in self._constraints:
            raise DuplicateIdError(
                f'Constraint with id "{descriptor.id}" already registered',
                details={"kind": "constraint", "id": descriptor.id},
                hint="Use um id estável e único por constraint",
            )
        self._constraints[descriptor.id] = descriptor

    def register_module(self, module: PraxisModule) -> None:
        """Registra todas as regras e constraints de `module` (tudo ou nada)."""
        if module.name is not None and module.name in self._modules:
            raise DuplicateIdError(
                f'Module "{module.name}" already registered',
                details={"kind": "module", "id": module.name},
            )

        dup_rule = _find_duplicates((r.id for r in module.rules), self._rules)
        if dup_rule is not None:
            raise DuplicateIdError(
                f'Rule with id "{dup_rule}" already registered',
                details={"kind": "rule", "id": dup_rule, "module": module.name},
                hint="O módulo não foi registrado; nenhuma regra ou constraint dele foi armazenada",
            )

        dup_constraint = _find_duplicates((c.id for c in module.constraints), self._constraints)
        if dup_constraint is not None:
            raise DuplicateIdError(
                f'Constraint with id "{dup_constraint}" already registered',
                details={"kind": "constraint", "id": dup_constraint, "module": module.name},
                hint="O módulo não foi registrado; nenhuma regra ou constraint dele foi armazenada",
            )

        for rule in module.rules:
            self.register_rule(rule)
        for constraint in module.constraints:
            self.register_constraint(constraint)

        self._module_count += 1
        if module.name is not None:
            self._modules[module.name] = module

    # -----------------------------
    # Consulta
    # -----------------------------
    def get_rule(self, rule_id: str) -> Optional[RuleDescriptor]:
        return self._rules.get(rule_id)

    def get_constraint(self, constraint_id: str) -> Optional[ConstraintDescriptor]:
        return self._constraints.get(constraint_id)

    def has_rule(self, rule_id: str) -> bool:
        return rule_id in self._rules

    def has_constraint(self, constraint_id: str) -> bool:
        return constraint_id in self._constraints

    def get_rule_ids(self) -> List[str]:
        return list(self._rules)

    def get_constraint_ids(self) -> List[str]:
        return list(self._constraints)

    def get_all_rules(self) -> List[RuleDescriptor]:
        return list(self._rules.values())

    def get_all_constraints(self) -> List[ConstraintDescriptor]:
        return list(self._constraints.values())

    def get_modules(self) -> Dict[str, PraxisModule]:
        """Módulos nomeados registrados, por nome."""
        return dict(self._modules)

    @property
    def module_count(self) -> int:
        return self._module_count

    def __len__(self) -> int:
        return len(self._rules) + len(self._constraints)
