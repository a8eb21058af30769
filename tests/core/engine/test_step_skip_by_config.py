# tests/core/engine/test_step_skip_by_config.py
"""
Testes de desabilitação por configuração.

Quando `rules.<id>.enabled` ou `constraints.<id>.enabled` é `false`,
`step()` não avalia o descritor e registra o skip no journal.

Decisões arquiteturais:
    - Ausência de configuração significa habilitado
    - `step_with_config` respeita a lista explícita recebida

Limites explícitos:
    - Não valida o loader de config (ver tests/core/config)
"""

from praxis_engine.core.engine import LogicEngine
from praxis_engine.core.protocol import StepConfig


def test_disabled_rule_is_skipped(counter_registry, increment_event):
    config = {"rules": {"counter.increment": {"enabled": False}}}
    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0}, config=config)

    result = engine.step([increment_event(5)])

    assert result.state.context == {"count": 0}
    assert result.state.facts == []
    skipped = engine.journal.events_for("counter.increment")
    assert skipped[0]["message"] == "skipped by config"
    assert skipped[0]["section"] == "rules"


def test_disabled_constraint_is_skipped(counter_registry, increment_event):
    config = {"constraints": {"counter.max100": {"enabled": False}}}
    engine = LogicEngine(registry=counter_registry, initial_context={"count": 100}, config=config)

    result = engine.step([increment_event(5)])

    assert result.ok
    assert result.state.context == {"count": 105}


def test_step_with_config_ignores_enabled_switch(counter_registry, increment_event):
    config = {"rules": {"counter.increment": {"enabled": False}}}
    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0}, config=config)

    result = engine.step_with_config(
        [increment_event(2)], StepConfig(rule_ids=["counter.increment"], constraint_ids=[])
    )

    assert result.state.context == {"count": 2}


def test_journal_level_comes_from_config(counter_registry, increment_event):
    config = {"engine": {"log_level": "WARNING"}, "rules": {"counter.increment": {"enabled": False}}}
    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0}, config=config)

    engine.step([increment_event(1)])

    assert engine.journal.min_level == "WARNING"
    assert list(engine.journal.events) == []
