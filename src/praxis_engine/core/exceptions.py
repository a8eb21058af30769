"""
Praxis Engine — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do Praxis Engine.

Objetivo:
- Sinalizar erros de programação no setup (ids duplicados, actor sem engine,
  start duplicado) como falhas fatais
- Carregar dados estruturados (`details`) e uma dica acionável (`hint`)
- Evitar ValueError/RuntimeError genéricos nos guardrails do engine

Regras:
- Falhas de regras e constraints em runtime NÃO usam estas exceções:
  viram `Diagnostic` (ver `praxis_engine.core.errors`).
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Não são frozen: o interpretador e o `contextlib` atribuem
  `__traceback__` ao propagar a exceção. `eq=False` preserva a igualdade
  e o hash por identidade de `Exception`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class PraxisException(Exception):
    """Base class para exceções internas do Praxis Engine.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Registro (rules / constraints / modules / actors)
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class DuplicateIdError(PraxisException, ValueError):
    """Identificador já registrado (regra, constraint, módulo ou actor).

    A duplicidade é tratada como erro fatal de setup: nenhum registro
    parcial é mantido após a detecção.
    """


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ActorNotFoundError(PraxisException, KeyError):
    """Actor não registrado no manager."""


@dataclass(eq=False)
class ActorNotAttachedError(PraxisException, RuntimeError):
    """Manager sem engine anexado no momento do start."""


@dataclass(eq=False)
class ActorAlreadyStartedError(PraxisException, RuntimeError):
    """Start de um actor ativo (ou em inicialização) sem stop intermediário."""


@dataclass(eq=False)
class ActorStateError(PraxisException, RuntimeError):
    """Operação incompatível com o estado de ciclo de vida do actor."""


@dataclass(eq=False)
class ActorNotificationError(PraxisException, RuntimeError):
    """Um ou mais actors falharam em `on_state_change`.

    Levantada somente depois que todos os actors ativos foram notificados.
    """


# ---------------------------------------------------------------------------
# Schema / introspecção
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class SchemaFormatError(PraxisException, ValueError):
    """Formato de arquivo de schema não suportado ou conteúdo inválido."""
