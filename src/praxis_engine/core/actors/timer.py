# src/praxis_engine/core/actors/timer.py
"""
Actor de timer.

Despacha um evento a cada `interval` segundos enquanto está ativo. Por
padrão o evento entra no engine via `engine.step([event])`; um `dispatch`
customizado `(engine, event)` pode ser informado (por exemplo, para um
engine reativo).

Falhas de um disparo são registradas no journal do engine (quando existir)
e o timer segue ativo.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
from typing import Any, Callable, Optional


def _step_dispatch(engine: Any, event: Any) -> Any:
    return engine.step([event])


class TimerActor:
    """Actor que produz `create_event()` periodicamente."""

    on_state_change = None

    def __init__(
        self,
        id: str,
        interval: float,
        create_event: Callable[[], Any],
        dispatch: Optional[Callable[[Any, Any], Any]] = None,
        description: Optional[str] = None,
    ):
        if not isinstance(id, str) or not id.strip():
            raise ValueError("actor.id must be a non-empty string")
        if interval <= 0:
            raise ValueError("interval must be greater than zero")

        self.id = id
        self.interval = float(interval)
        self.create_event = create_event
        self.dispatch = dispatch or _step_dispatch
        self.description = description or f"Timer actor ({self.interval}s) - {id}"
        self.tick_count = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def on_start(self, engine: Any) -> None:
        self._task = asyncio.create_task(self._run(engine), name=f"praxis-timer-{self.id}")

    async def on_stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self, engine: Any) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                result = self.dispatch(engine, self.create_event())
                if inspect.isawaitable(result):
                    await result
                self.tick_count += 1
            except Exception as e:
                journal = getattr(engine, "journal", None)
                if journal is not None:
                    journal.log(
                        source_id=self.id,
                        level="ERROR",
                        message=f"Error dispatching timer event: {e}",
                        exception_class=e.__class__.__name__,
                    )


def create_timer_actor(
    id: str,
    interval: float,
    create_event: Callable[[], Any],
    dispatch: Optional[Callable[[Any, Any], Any]] = None,
) -> TimerActor:
    return TimerActor(id, interval, create_event, dispatch=dispatch)
