"""
Praxis Engine — Canonical Diagnostic Catalog (v1)

Este módulo define o padrão canônico de diagnósticos do Praxis Engine.
Diagnósticos são artefatos de domínio e fazem parte do contrato
operacional do engine, devendo ser:

- explícitos
- serializáveis
- rastreáveis até a regra/constraint de origem

Diagnósticos nunca são levantados como exceção: são acumulados no
`StepResult` de cada step.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .protocol import Diagnostic, DiagnosticKind


# ---------------------------------------------------------------------------
# Catálogo canônico de códigos (v1)
# ---------------------------------------------------------------------------

RULE_NOT_FOUND = "RULE_NOT_FOUND"
RULE_EXECUTION_ERROR = "RULE_EXECUTION_ERROR"
RULE_INVALID_RETURN = "RULE_INVALID_RETURN"

CONSTRAINT_NOT_FOUND = "CONSTRAINT_NOT_FOUND"
CONSTRAINT_VIOLATED = "CONSTRAINT_VIOLATED"
CONSTRAINT_EXECUTION_ERROR = "CONSTRAINT_EXECUTION_ERROR"


def _exc_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def rule_not_found(*, rule_id: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.RULE_ERROR,
        message=f'Rule "{rule_id}" not found in registry',
        source_id=rule_id,
        data={"code": RULE_NOT_FOUND, "rule_id": rule_id},
    )


def rule_execution_error(*, rule_id: str, exc: BaseException) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.RULE_ERROR,
        message=f'Error executing rule "{rule_id}": {_exc_message(exc)}',
        source_id=rule_id,
        data={
            "code": RULE_EXECUTION_ERROR,
            "rule_id": rule_id,
            "exception_class": exc.__class__.__name__,
            "error": _exc_message(exc),
        },
    )


def rule_invalid_return(*, rule_id: str, received: Any) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.RULE_ERROR,
        message=f'Rule "{rule_id}" must return an iterable of facts, received {type(received).__name__}',
        source_id=rule_id,
        data={
            "code": RULE_INVALID_RETURN,
            "rule_id": rule_id,
            "received": type(received).__name__,
        },
    )


def constraint_not_found(*, constraint_id: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.CONSTRAINT_VIOLATION,
        message=f'Constraint "{constraint_id}" not found in registry',
        source_id=constraint_id,
        data={"code": CONSTRAINT_NOT_FOUND, "constraint_id": constraint_id},
    )


def constraint_violated(
    *,
    constraint_id: str,
    description: str,
    message: Optional[str] = None,
) -> Diagnostic:
    """Violação declarada pela constraint (retorno `False` ou mensagem)."""
    return Diagnostic(
        kind=DiagnosticKind.CONSTRAINT_VIOLATION,
        message=message or f'Constraint "{constraint_id}" violated',
        source_id=constraint_id,
        data={
            "code": CONSTRAINT_VIOLATED,
            "constraint_id": constraint_id,
            "description": description,
        },
    )


def constraint_execution_error(*, constraint_id: str, exc: BaseException) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.CONSTRAINT_VIOLATION,
        message=f'Error checking constraint "{constraint_id}": {_exc_message(exc)}',
        source_id=constraint_id,
        data={
            "code": CONSTRAINT_EXECUTION_ERROR,
            "constraint_id": constraint_id,
            "exception_class": exc.__class__.__name__,
            "error": _exc_message(exc),
        },
    )


def diagnostic_code(diagnostic: Diagnostic) -> Optional[str]:
    """Retorna o código estável do catálogo associado ao diagnóstico."""
    data: Dict[str, Any] = diagnostic.data or {}
    code = data.get("code")
    return code if isinstance(code, str) else None
