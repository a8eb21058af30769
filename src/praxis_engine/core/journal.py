# src/praxis_engine/core/journal.py
"""
Journal estruturado de eventos do engine.

Este módulo define o `EngineJournal`, o registro canônico de observabilidade
compartilhado pelo engine discreto, pelo engine reativo e pelo manager de
actors.

Logs não são strings livres: cada chamada a `log` produz um evento
estruturado contendo, no mínimo:
    - engine_id
    - source_id (regra, constraint, subscriber ou actor de origem)
    - level
    - message
    - timestamp (UTC, ISO 8601)

Princípios fundamentais:
    - Isolamento por engine (cada engine possui seu próprio journal)
    - Eventos são dados inspecionáveis, não texto para parsing
    - Falhas isoladas (subscribers, regras) sempre deixam rastro

Invariantes:
    - A ordem dos eventos reflete a ordem de chamada
    - Eventos abaixo do nível mínimo configurado são descartados
    - Com `max_events`, apenas os eventos mais recentes são mantidos

Limites explícitos:
    - Não persiste eventos
    - Não envia eventos para transportes externos
    - Não decide políticas de execução

Este módulo existe para garantir observabilidade clara,
estruturada e rastreável do engine.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional
from uuid import uuid4


LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

DEFAULT_MAX_EVENTS = 1000


def _level_value(level: str) -> int:
    key = str(level).upper()
    if key not in LEVELS:
        raise ValueError(f"Nível de log desconhecido: {level!r}")
    return LEVELS[key]


@dataclass
class EngineJournal:
    """
    Journal de eventos estruturados de um engine.

    Campos:
        - engine_id: identificador do engine dono do journal
        - min_level: nível mínimo registrado (DEBUG, INFO, WARNING, ERROR)
        - max_events: limite de eventos retidos (None = ilimitado)
        - events: eventos registrados, em ordem de chamada
        - warnings: warnings agrupados por `source_id`

    Decisões arquiteturais:
        - O journal é passado explicitamente (sem estado global)
        - Campos extras de `log` são preservados sem filtragem
    """

    engine_id: str = field(default_factory=lambda: uuid4().hex)
    min_level: str = "DEBUG"
    max_events: Optional[int] = DEFAULT_MAX_EVENTS

    events: Deque[Dict[str, Any]] = field(init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        _level_value(self.min_level)
        self.events = deque(maxlen=self.max_events)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]], *, engine_id: Optional[str] = None) -> "EngineJournal":
        """Cria o journal a partir da seção `engine` da configuração."""
        engine_cfg = (config or {}).get("engine", {}) or {}
        kwargs: Dict[str, Any] = {
            "min_level": str(engine_cfg.get("log_level", "DEBUG")).upper(),
            "max_events": engine_cfg.get("max_journal_events", DEFAULT_MAX_EVENTS),
        }
        if engine_id is not None:
            kwargs["engine_id"] = engine_id
        return cls(**kwargs)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def is_enabled_for(self, level: str) -> bool:
        return _level_value(level) >= _level_value(self.min_level)

    def log(self, *, source_id: str, level: str, message: str, **extra: Any) -> None:
        if not self.is_enabled_for(level):
            return
        event = {
            "engine_id": self.engine_id,
            "source_id": source_id,
            "level": str(level).upper(),
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source_id: str, message: str) -> None:
        if source_id not in self.warnings:
            self.warnings[source_id] = []
        self.warnings[source_id].append(message)
        self.log(source_id=source_id, level="WARNING", message=message)

    # -----------------------------
    # Consulta
    # -----------------------------
    def events_for(self, source_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["source_id"] == source_id]

    def errors(self) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["level"] == "ERROR"]

    def clear(self) -> None:
        self.events.clear()
        self.warnings.clear()
