# tests/test_dsl.py
"""
Testes dos helpers de definição (DSL).

Os testes asseguram que:
- definições de fato/evento criam registros com a tag correta
- `matches` aceita objetos do protocolo e dicts
- `define_rule` / `define_constraint` funcionam com `impl=` e como decorator
- módulos definidos pela DSL são aceitos pelo registry e pelo engine
"""

import pytest

from praxis_engine import (
    LogicEngine,
    PraxisRegistry,
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
from praxis_engine.core.protocol import Event, Fact
from praxis_engine.core.rules import ConstraintDescriptor, RuleDescriptor

Incremented = define_fact("Incremented")
Increment = define_event("INCREMENT")
Reset = define_event("RESET")


def test_definitions_create_tagged_records():
    assert Incremented.create({"amount": 2}) == Fact(tag="Incremented", payload={"amount": 2})
    assert Increment.create() == Event(tag="INCREMENT", payload={})


def test_definitions_reject_empty_tags():
    with pytest.raises(ValueError):
        define_fact("")
    with pytest.raises(ValueError):
        define_event("   ")


def test_matches_accepts_objects_and_dicts():
    assert Increment.matches(Event(tag="INCREMENT"))
    assert Increment.matches({"tag": "INCREMENT", "payload": {}})
    assert not Increment.matches(Event(tag="RESET"))
    assert not Increment.matches("INCREMENT")


def test_filter_and_find_helpers():
    events = [Increment.create({"amount": 1}), Reset.create(), Increment.create({"amount": 2})]
    facts = [Incremented.create({"amount": 1}), {"tag": "Other"}]

    assert [e.payload["amount"] for e in filter_events(events, Increment)] == [1, 2]
    assert find_event(events, Reset) == Reset.create()
    assert find_event([], Reset) is None
    assert filter_facts(facts, Incremented) == [Incremented.create({"amount": 1})]
    assert find_fact(facts, define_fact("Missing")) is None


def test_define_rule_with_impl_and_as_decorator():
    direct = define_rule(id="direct", description="Direct rule", impl=lambda state, events: [])

    @define_rule(id="decorated", meta={"depends_on": "direct"})
    def decorated(state, events):
        """Decorated rule."""
        return []

    assert isinstance(direct, RuleDescriptor)
    assert direct.description == "Direct rule"
    assert isinstance(decorated, RuleDescriptor)
    assert decorated.id == "decorated"
    assert decorated.description == "Decorated rule."
    assert decorated.meta == {"depends_on": "direct"}


def test_define_constraint_as_decorator():
    @define_constraint(id="positive", description="Count is positive")
    def positive(state):
        return state.context["count"] >= 0

    assert isinstance(positive, ConstraintDescriptor)
    assert positive.description == "Count is positive"


def test_dsl_module_runs_in_engine():
    """
    Verifica o fluxo completo: módulo definido pela DSL, registrado no
    registry e avaliado por um step.
    """
    @define_rule(id="counter.increment", description="Soma amount ao contador")
    def increment(state, events):
        produced = []
        for event in filter_events(events, Increment):
            state.context["count"] += event.payload["amount"]
            produced.append(Incremented.create({"amount": event.payload["amount"]}))
        return produced

    @define_constraint(id="counter.max100", description="Contador nunca passa de 100")
    def max100(state):
        return state.context["count"] <= 100 or f"Count {state.context['count']} exceeds maximum of 100"

    module = define_module(name="counter", rules=[increment], constraints=[max100], meta={"version": 1})
    registry = PraxisRegistry()
    registry.register_module(module)

    engine = LogicEngine(registry=registry, initial_context={"count": 0})
    result = engine.step([Increment.create({"amount": 5}), Reset.create()])

    assert result.state.context == {"count": 5}
    assert result.state.facts == [Incremented.create({"amount": 5})]
    assert result.diagnostics == []
    assert registry.get_modules()["counter"].meta == {"version": 1}
