# src/praxis_engine/dsl.py
"""
DSL de definição do Praxis Engine.

Helpers ergonômicos para declarar fatos, eventos, regras, constraints e
módulos, produzindo os mesmos descritores consumidos pelo registry.

Exemplo:

    Incremented = define_fact("Incremented")
    Increment = define_event("INCREMENT")

    @define_rule(id="counter.increment", description="Soma `amount` ao contador")
    def increment(state, events):
        facts = []
        for event in filter_events(events, Increment):
            state.context["count"] += event.payload["amount"]
            facts.append(Incremented.create({"amount": event.payload["amount"]}))
        return facts

`define_rule` e `define_constraint` aceitam `impl=` diretamente ou funcionam
como decorators quando `impl` é omitido.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from praxis_engine.core.protocol import Event, Fact, tag_of
from praxis_engine.core.rules.descriptors import (
    ConstraintDescriptor,
    ConstraintFn,
    PraxisModule,
    RuleDescriptor,
    RuleFn,
)


@dataclass(frozen=True)
class FactDefinition:
    """Definição tipada de fato: fábrica + predicado por `tag`."""
    tag: str

    def create(self, payload: Any = None) -> Fact:
        return Fact(tag=self.tag, payload={} if payload is None else payload)

    def matches(self, record: Any) -> bool:
        return tag_of(record) == self.tag


@dataclass(frozen=True)
class EventDefinition:
    """Definição tipada de evento: fábrica + predicado por `tag`."""
    tag: str

    def create(self, payload: Any = None) -> Event:
        return Event(tag=self.tag, payload={} if payload is None else payload)

    def matches(self, record: Any) -> bool:
        return tag_of(record) == self.tag


Definition = Union[FactDefinition, EventDefinition]


def _require_tag(tag: Any) -> str:
    if not isinstance(tag, str) or not tag.strip():
        raise ValueError("tag must be a non-empty string")
    return tag


def define_fact(tag: str) -> FactDefinition:
    return FactDefinition(_require_tag(tag))


def define_event(tag: str) -> EventDefinition:
    return EventDefinition(_require_tag(tag))


def define_rule(
    *,
    id: str,
    description: str = "",
    impl: Optional[RuleFn] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Cria um `RuleDescriptor`.

    Sem `impl`, retorna um decorator que recebe a função da regra e devolve
    o descritor.
    """
    def build(fn: RuleFn) -> RuleDescriptor:
        return RuleDescriptor(
            id=id, description=description or (fn.__doc__ or "").strip(), impl=fn, meta=dict(meta or {})
        )

    if impl is None:
        return build
    return build(impl)


def define_constraint(
    *,
    id: str,
    description: str = "",
    impl: Optional[ConstraintFn] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Any:
    """Cria um `ConstraintDescriptor` (ou decorator, sem `impl`)."""
    def build(fn: ConstraintFn) -> ConstraintDescriptor:
        return ConstraintDescriptor(
            id=id, description=description or (fn.__doc__ or "").strip(), impl=fn, meta=dict(meta or {})
        )

    if impl is None:
        return build
    return build(impl)


def define_module(
    *,
    rules: Optional[Iterable[RuleDescriptor]] = None,
    constraints: Optional[Iterable[ConstraintDescriptor]] = None,
    name: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> PraxisModule:
    return PraxisModule(
        rules=list(rules or []),
        constraints=list(constraints or []),
        name=name,
        meta=dict(meta or {}),
    )


def filter_events(events: Iterable[Any], definition: Definition) -> List[Any]:
    return [e for e in events if definition.matches(e)]


def filter_facts(facts: Iterable[Any], definition: Definition) -> List[Any]:
    return [f for f in facts if definition.matches(f)]


def find_event(events: Iterable[Any], definition: Definition) -> Optional[Any]:
    return next((e for e in events if definition.matches(e)), None)


def find_fact(facts: Iterable[Any], definition: Definition) -> Optional[Any]:
    return next((f for f in facts if definition.matches(f)), None)


__all__ = [
    "EventDefinition",
    "FactDefinition",
    "define_constraint",
    "define_event",
    "define_fact",
    "define_module",
    "define_rule",
    "filter_events",
    "filter_facts",
    "find_event",
    "find_fact",
]
