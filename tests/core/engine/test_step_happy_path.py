# tests/core/engine/test_step_happy_path.py
"""
Testes do caminho feliz do LogicEngine.

Este módulo valida que um step:
- executa as regras em ordem de registro
- aplica as mutações de context feitas pelas regras
- retorna os fatos produzidos na chamada
- avalia constraints sobre o context pós-regras

Invariantes:
    - `StepResult.state.facts` contém apenas os fatos desta chamada
    - Um step sem falhas não produz diagnósticos
    - O journal registra a conclusão do step
"""

import pytest

try:
    from praxis_engine.core.engine import LogicEngine, create_praxis_engine
    from praxis_engine.core.protocol import Fact, StepResult
    from praxis_engine.core.rules import PraxisRegistry, RuleDescriptor
except Exception as e:  # noqa: BLE001
    LogicEngine = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing LogicEngine. Implement:\n"
            "- src/praxis_engine/core/engine/engine.py (LogicEngine, create_praxis_engine)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_step_applies_rules_and_returns_facts(counter_registry, increment_event):
    """
    Verifica o ciclo completo de um step bem-sucedido.

    Com `count = 0` e um evento `INCREMENT(5)`:
        - o context passa a `count = 5`
        - um fato `Incremented` é produzido
        - nenhuma constraint é violada
    """
    _require_imports()

    engine = create_praxis_engine(registry=counter_registry, initial_context={"count": 0})

    result = engine.step([increment_event(5)])

    assert isinstance(result, StepResult)
    assert result.ok is True
    assert result.diagnostics == []
    assert result.state.context == {"count": 5}
    assert result.state.facts == [Fact(tag="Incremented", payload={"amount": 5})]
    assert engine.get_context() == {"count": 5}
    assert engine.get_facts() == [Fact(tag="Incremented", payload={"amount": 5})]


def test_rules_run_in_registration_order():
    _require_imports()

    calls = []

    def make(rule_id):
        def impl(state, events):
            calls.append(rule_id)
            state.context["trail"].append(rule_id)
            return [Fact(tag=rule_id)]
        return impl

    registry = PraxisRegistry()
    for rule_id in ("second", "first", "third"):
        registry.register_rule(RuleDescriptor(id=rule_id, description=rule_id, impl=make(rule_id)))

    engine = LogicEngine(registry=registry, initial_context={"trail": []})
    result = engine.step([])

    assert calls == ["second", "first", "third"]
    assert result.state.context["trail"] == ["second", "first", "third"]
    assert [f.tag for f in result.state.facts] == ["second", "first", "third"]


def test_rule_returning_none_contributes_no_facts():
    _require_imports()

    registry = PraxisRegistry()
    registry.register_rule(RuleDescriptor(id="noop", description="noop", impl=lambda state, events: None))

    engine = LogicEngine(registry=registry, initial_context={})
    result = engine.step([])

    assert result.ok
    assert result.state.facts == []


def test_rule_may_rebind_context():
    """
    Verifica que uma regra pode substituir `state.context` por outro objeto
    e que o engine passa a usar o novo context.
    """
    _require_imports()

    def replace(state, events):
        state.context = {"count": state.context["count"] * 10}
        return []

    registry = PraxisRegistry()
    registry.register_rule(RuleDescriptor(id="replace", description="rebind", impl=replace))

    engine = LogicEngine(registry=registry, initial_context={"count": 3})
    engine.step([])

    assert engine.get_context() == {"count": 30}


def test_facts_do_not_leak_between_steps(counter_registry, increment_event):
    _require_imports()

    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0})

    first = engine.step([increment_event(1)])
    second = engine.step([])

    assert len(first.state.facts) == 1
    assert second.state.facts == []
    assert second.diagnostics == []
    assert engine.get_facts() == []
    assert engine.get_context() == {"count": 1}


def test_step_is_journaled(counter_registry, increment_event, journal):
    _require_imports()

    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0}, journal=journal)
    engine.step([increment_event(2), increment_event(3)])

    events = journal.events_for("engine")
    assert events[-1]["message"] == "step completed"
    assert events[-1]["event_count"] == 2
    assert events[-1]["fact_count"] == 2
    assert events[-1]["engine_id"] == "engine-test-001"
