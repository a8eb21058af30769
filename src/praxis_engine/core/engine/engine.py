# src/praxis_engine/core/engine/engine.py
"""
Engine discreto (step-based) do Praxis Engine.

Cada chamada a `step(events)` executa exatamente duas fases, de forma
síncrona e sem suspensão:

1. Fase de regras: regras registradas (ou o subconjunto de
   `step_with_config`) em ordem de registro. Cada regra recebe o estado vivo
   e os eventos; pode mutar `state.context` e retornar fatos. Exceções viram
   diagnóstico `rule-error` e a avaliação continua.
2. Fase de constraints: todas as constraints são avaliadas contra o context
   pós-regras. Violações e exceções viram `constraint-violation`; nenhuma
   interrompe as demais.

Guardrails:
- Nenhuma exceção de regra/constraint atravessa `step()`: tudo vira
  `Diagnostic` (catálogo em `praxis_engine.core.errors`).
- Fatos não são validados: formatos inesperados são armazenados como
  vieram (regras dinâmicas/geradas dependem dessa permissividade).
- Context devolvido a chamadores é sempre uma cópia isolada (`safe_clone`).
- Regras/constraints desabilitadas por configuração (`rules.<id>.enabled`,
  `constraints.<id>.enabled`) são puladas em `step()` e registradas no journal.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from praxis_engine.core import errors
from praxis_engine.core.config.loader import is_enabled
from praxis_engine.core.journal import EngineJournal
from praxis_engine.core.protocol import Diagnostic, DiagnosticKind, PraxisState, StepConfig, StepResult
from praxis_engine.core.rules.registry import PraxisRegistry
from praxis_engine.core.snapshot import safe_clone


class LogicEngine:
    """Engine canônico do Praxis (fase de regras + fase de constraints)."""

    def __init__(
        self,
        *,
        registry: PraxisRegistry,
        initial_context: Any,
        initial_facts: Optional[Iterable[Any]] = None,
        initial_meta: Optional[Dict[str, Any]] = None,
        config: Optional[Dict[str, Any]] = None,
        journal: Optional[EngineJournal] = None,
    ):
        self.registry: PraxisRegistry = registry
        self.config: Dict[str, Any] = dict(config or {})
        self.journal: EngineJournal = journal or EngineJournal.from_config(self.config)

        self._context: Any = initial_context
        self._facts: List[Any] = list(initial_facts or [])
        self._meta: Dict[str, Any] = dict(initial_meta or {})

    # ------------------------------------------------------------------
    # Acessores (sempre cópias isoladas)
    # ------------------------------------------------------------------
    def get_context(self) -> Any:
        return safe_clone(self._context)

    def get_facts(self) -> List[Any]:
        return list(self._facts)

    def get_meta(self) -> Dict[str, Any]:
        return safe_clone(self._meta)

    def get_state(self) -> PraxisState:
        return PraxisState(
            context=safe_clone(self._context),
            facts=list(self._facts),
            meta=safe_clone(self._meta),
        )

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def _enabled_ids(self, section: str, ids: List[str]) -> List[str]:
        enabled: List[str] = []
        for item_id in ids:
            if is_enabled(self.config, section, item_id):
                enabled.append(item_id)
            else:
                self.journal.log(source_id=item_id, level="DEBUG", message="skipped by config", section=section)
        return enabled

    def step(self, events: Sequence[Any]) -> StepResult:
        """Aplica todas as regras e constraints habilitadas aos `events`."""
        config = StepConfig(
            rule_ids=self._enabled_ids("rules", self.registry.get_rule_ids()),
            constraint_ids=self._enabled_ids("constraints", self.registry.get_constraint_ids()),
        )
        return self.step_with_config(events, config)

    def step_with_config(self, events: Sequence[Any], config: StepConfig) -> StepResult:
        """Aplica apenas as regras/constraints listadas em `config`, nessa ordem."""
        events = list(events or [])
        diagnostics: List[Diagnostic] = []

        working = PraxisState(context=self._context, facts=[], meta=self._meta)

        # Fase 1: regras
        for rule_id in config.rule_ids:
            rule = self.registry.get_rule(rule_id)
            if rule is None:
                self._record(diagnostics, errors.rule_not_found(rule_id=rule_id))
                continue

            try:
                produced = rule.impl(working, events)
                if produced is None:
                    continue
                if isinstance(produced, (str, bytes, Mapping)) or not isinstance(produced, Iterable):
                    self._record(diagnostics, errors.rule_invalid_return(rule_id=rule_id, received=produced))
                    continue
                working.facts.extend(list(produced))
            except Exception as e:
                self._record(diagnostics, errors.rule_execution_error(rule_id=rule_id, exc=e))

        # A regra pode ter reatribuído `state.context`
        self._context = working.context

        # Fase 2: constraints
        for constraint_id in config.constraint_ids:
            constraint = self.registry.get_constraint(constraint_id)
            if constraint is None:
                self._record(diagnostics, errors.constraint_not_found(constraint_id=constraint_id))
                continue

            try:
                outcome = constraint.impl(working)
            except Exception as e:
                self._record(diagnostics, errors.constraint_execution_error(constraint_id=constraint_id, exc=e))
                continue

            if outcome is False:
                self._record(
                    diagnostics,
                    errors.constraint_violated(constraint_id=constraint_id, description=constraint.description),
                )
            elif isinstance(outcome, str):
                self._record(
                    diagnostics,
                    errors.constraint_violated(
                        constraint_id=constraint_id,
                        description=constraint.description,
                        message=outcome,
                    ),
                )

        self._facts = list(working.facts)

        self.journal.log(
            source_id="engine",
            level="DEBUG",
            message="step completed",
            event_count=len(events),
            fact_count=len(working.facts),
            diagnostic_count=len(diagnostics),
        )

        return StepResult(
            state=PraxisState(
                context=safe_clone(self._context),
                facts=list(working.facts),
                meta=safe_clone(self._meta),
            ),
            diagnostics=diagnostics,
        )

    def _record(self, diagnostics: List[Diagnostic], diagnostic: Diagnostic) -> None:
        diagnostics.append(diagnostic)
        level = "ERROR" if diagnostic.kind == DiagnosticKind.RULE_ERROR else "WARNING"
        self.journal.log(
            source_id=diagnostic.source_id,
            level=level,
            message=diagnostic.message,
            kind=diagnostic.kind.value,
        )

    # ------------------------------------------------------------------
    # Válvulas de escape (testes e sincronização externa)
    # ------------------------------------------------------------------
    def update_context(self, updater: Callable[[Any], Any]) -> None:
        """Substitui o context por `updater(context)` sem rodar regras/constraints."""
        self._context = updater(self._context)

    def add_facts(self, facts: Iterable[Any]) -> None:
        self._facts.extend(facts)

    def clear_facts(self) -> None:
        self._facts = []

    def reset(
        self,
        *,
        initial_context: Any,
        initial_facts: Optional[Iterable[Any]] = None,
        initial_meta: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._context = initial_context
        self._facts = list(initial_facts or [])
        self._meta = dict(initial_meta or {})


def create_praxis_engine(
    *,
    registry: PraxisRegistry,
    initial_context: Any,
    initial_facts: Optional[Iterable[Any]] = None,
    initial_meta: Optional[Dict[str, Any]] = None,
    config: Optional[Dict[str, Any]] = None,
    journal: Optional[EngineJournal] = None,
) -> LogicEngine:
    return LogicEngine(
        registry=registry,
        initial_context=initial_context,
        initial_facts=initial_facts,
        initial_meta=initial_meta,
        config=config,
        journal=journal,
    )
