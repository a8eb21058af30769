# tests/core/actors/test_timer_actor.py
"""
Testes do TimerActor.

Os testes usam intervalos curtos (centésimos de segundo) e verificam
que o timer despacha eventos enquanto ativo e para completamente no stop.
"""

import asyncio

import pytest

from praxis_engine.core.actors import ActorManager, TimerActor, create_timer_actor
from praxis_engine.core.engine import LogicEngine
from praxis_engine.core.protocol import Event
from praxis_engine.core.reactive import ReactiveLogicEngine


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        TimerActor("ticker", 0, lambda: None)


def test_default_description_mentions_interval():
    timer = create_timer_actor("ticker", 0.5, lambda: None)
    assert "0.5" in timer.description
    assert timer.on_state_change is None


def test_timer_steps_engine_until_stopped(counter_registry):
    engine = LogicEngine(registry=counter_registry, initial_context={"count": 0})
    manager = ActorManager()
    manager.attach_engine(engine)
    timer = create_timer_actor("ticker", 0.01, lambda: Event(tag="INCREMENT", payload={"amount": 1}))
    manager.register(timer)

    async def scenario():
        await manager.start("ticker")
        assert timer.running
        await asyncio.sleep(0.08)
        await manager.stop("ticker")
        ticks_at_stop = timer.tick_count
        count_at_stop = engine.get_context()["count"]
        await asyncio.sleep(0.05)
        return ticks_at_stop, count_at_stop

    ticks_at_stop, count_at_stop = asyncio.run(scenario())

    assert ticks_at_stop >= 1
    assert count_at_stop == ticks_at_stop
    assert timer.tick_count == ticks_at_stop
    assert engine.get_context()["count"] == count_at_stop
    assert not timer.running


def test_custom_async_dispatch_into_reactive_engine():
    engine = ReactiveLogicEngine(initial_context={"ticks": 0})

    async def dispatch(target, event):
        await asyncio.sleep(0)
        target.apply(lambda state: state.context.__setitem__("ticks", state.context["ticks"] + 1))

    manager = ActorManager()
    manager.attach_engine(engine)
    manager.register(TimerActor("pulse", 0.01, lambda: {"tag": "PULSE"}, dispatch=dispatch))

    async def scenario():
        await manager.start_all()
        await asyncio.sleep(0.06)
        await manager.stop_all()

    asyncio.run(scenario())

    assert engine.context["ticks"] >= 1


def test_dispatch_errors_are_journaled_and_timer_keeps_running(journal):
    engine = ReactiveLogicEngine(initial_context={}, journal=journal)
    attempts = []

    def dispatch(target, event):
        attempts.append(event)
        raise RuntimeError("dispatch failed")

    timer = TimerActor("flaky", 0.01, lambda: "tick", dispatch=dispatch)
    manager = ActorManager(journal=journal)
    manager.attach_engine(engine)
    manager.register(timer)

    async def scenario():
        await manager.start("flaky")
        await asyncio.sleep(0.06)
        still_running = timer.running
        await manager.stop("flaky")
        return still_running

    assert asyncio.run(scenario()) is True
    assert len(attempts) >= 2
    assert timer.tick_count == 0
    failures = [e for e in journal.events_for("flaky") if e["level"] == "ERROR"]
    assert failures[0]["message"] == "Error dispatching timer event: dispatch failed"
    assert failures[0]["exception_class"] == "RuntimeError"
