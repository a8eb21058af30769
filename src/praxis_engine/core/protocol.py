# src/praxis_engine/core/protocol.py
"""
Tipos canônicos do protocolo do Praxis Engine.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre regras, constraints, engines e observadores.

Os tipos aqui definidos representam:
    - fatos e eventos (registros etiquetados por `tag`)
    - o estado do engine (context, facts, meta)
    - diagnósticos produzidos durante um step
    - configuração e resultado de um step

Componentes principais:
    - Fact / Event     → registros imutáveis `{tag, payload}`
    - PraxisState      → contêiner de estado entregue a regras e constraints
    - DiagnosticKind   → enum de tipos de diagnóstico
    - Diagnostic       → relato estruturado de falha (dado, nunca exceção)
    - StepConfig       → subconjunto de regras/constraints de um step
    - StepResult       → resultado imutável de um step

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Payloads são opacos: validados apenas por regras e constraints
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - Fact, Event, Diagnostic e StepResult são imutáveis (frozen)
    - Tipos não dependem de engine, registry ou adapters

Limites explícitos:
    - Não executa regras
    - Não valida o formato de fatos produzidos por regras
    - Não decide políticas de execução

Este módulo existe para garantir consistência,
interoperabilidade e clareza semântica no protocolo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

# Versão do protocolo (compatibilidade entre linguagens/adapters).
PROTOCOL_VERSION = "1.0.0"


def _record_to_dict(record: Any) -> Any:
    to_dict = getattr(record, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return record


@dataclass(frozen=True)
class Fact:
    """
    Registro imutável de algo que aconteceu ou foi derivado.

    Fatos são produzidos exclusivamente por regras. Vários fatos podem
    compartilhar a mesma `tag`; o `payload` é opaco para o engine.
    """
    tag: str
    payload: Any = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "payload": self.payload}


@dataclass(frozen=True)
class Event:
    """
    Estímulo externo consumido pelas regras durante um único step.

    Eventos nunca são retidos pelo engine após o step que os processou.
    """
    tag: str
    payload: Any = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "payload": self.payload}


@dataclass
class PraxisState:
    """
    Estado do engine em um instante: context, facts e meta.

    Esta estrutura é entregue a regras (que podem mutar `context` in-place
    ou reatribuí-lo) e a constraints (que apenas a inspecionam). Quando
    devolvida a chamadores, é sempre uma cópia isolada.

    Campos:
        - context: estado de aplicação (único estado persistente e mutável)
        - facts: fatos correntes (lista permissiva, sem validação de forma)
        - meta: anotações do engine (versão de protocolo, timestamps...)
    """
    context: Any
    facts: List[Any] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context": self.context,
            "facts": [_record_to_dict(f) for f in self.facts],
            "meta": dict(self.meta),
        }


class DiagnosticKind(str, Enum):
    """
    Tipos canônicos de diagnóstico.

    Tipos definidos:
        - RULE_ERROR: a regra levantou exceção ou o id não existe no registry
        - CONSTRAINT_VIOLATION: a constraint retornou False/str ou levantou exceção

    Os valores são strings para facilitar serialização e relatórios.
    """
    RULE_ERROR = "rule-error"
    CONSTRAINT_VIOLATION = "constraint-violation"


@dataclass(frozen=True)
class Diagnostic:
    """
    Relato estruturado de uma falha de regra ou constraint.

    Diagnósticos são dados: são acumulados no resultado do step e nunca
    atravessam a fronteira do engine como exceção.

    Campos:
        - kind: tipo do diagnóstico (`DiagnosticKind`)
        - message: mensagem curta e humana
        - source_id: id da regra/constraint que originou o diagnóstico
        - data: dados estruturados adicionais (ex.: classe da exceção)
    """
    kind: DiagnosticKind
    message: str
    source_id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "source_id": self.source_id,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class StepConfig:
    """Subconjunto explícito (e ordenado) de regras e constraints de um step."""
    rule_ids: List[str] = field(default_factory=list)
    constraint_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável de um step do engine discreto.

    Campos:
        - state: snapshot do estado após o step; `facts` contém apenas
          os fatos produzidos nesta chamada
        - diagnostics: diagnósticos desta chamada, na ordem de avaliação

    Invariantes:
        - `state.context` nunca é a referência viva do engine
        - Nada deste resultado é reaproveitado no step seguinte
    """
    state: PraxisState
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def rule_errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == DiagnosticKind.RULE_ERROR]

    @property
    def violations(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == DiagnosticKind.CONSTRAINT_VIOLATION]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def tag_of(record: Any) -> Optional[str]:
    """Retorna a `tag` de um fato/evento, aceitando objetos ou dicts."""
    if isinstance(record, Mapping):
        tag = record.get("tag")
    else:
        tag = getattr(record, "tag", None)
    return tag if isinstance(tag, str) else None


def payload_of(record: Any) -> Any:
    """Retorna o `payload` de um fato/evento, aceitando objetos ou dicts."""
    if isinstance(record, Mapping):
        return record.get("payload")
    return getattr(record, "payload", None)
