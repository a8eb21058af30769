# tests/conftest.py
"""
Fixtures compartilhados para testes do Praxis Engine.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (strings YAML e dicts resolvidos)
- um registry de contador (regra de incremento + constraint de máximo)
- um journal isolado por teste

O objetivo destas fixtures é permitir testes do core (config, registry,
engines e actors) sem depender de:
- filesystem (exceto quando o teste usa `tmp_path` explicitamente)
- variáveis de ambiente
- adapters de UI ou transporte

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa um step
    - Nenhuma fixture compartilha estado entre testes

Este módulo existe como infraestrutura de teste e não
como validação funcional do engine.
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de configuração padrão (defaults) semelhante ao uso real.

    Representa o conteúdo típico de um `config.defaults.yaml`, base
    canônica sobre a qual a configuração local é aplicada via deep-merge.

    Returns:
        str: Conteúdo YAML representando configuração padrão (defaults).
    """
    return """\
engine:
  log_level: INFO
  max_journal_events: 500
rules:
  counter.increment:
    enabled: true
  counter.audit:
    enabled: true
constraints:
  counter.max100:
    enabled: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    YAML de configuração local (override).

    Contém apenas overrides: desliga a regra de auditoria e baixa o
    nível de log para DEBUG.
    """
    return """\
engine:
  log_level: DEBUG
rules:
  counter.audit:
    enabled: false
"""


@pytest.fixture
def dummy_config() -> dict:
    """Configuração mínima já resolvida (sem loader/merge)."""
    return {
        "engine": {"log_level": "DEBUG", "max_journal_events": 100},
        "rules": {},
        "constraints": {},
    }


# =====================================================
# Registry / engine fixtures
# =====================================================

@pytest.fixture
def journal():
    """Journal isolado por teste, com engine_id fixo."""
    from praxis_engine.core.journal import EngineJournal

    return EngineJournal(engine_id="engine-test-001")


@pytest.fixture
def counter_registry():
    """
    Registry canônico de contador usado por vários testes.

    Conteúdo:
        - regra `counter.increment`: para cada evento `INCREMENT`, soma
          `payload["amount"]` a `context["count"]` e produz um fato
          `Incremented`
        - constraint `counter.max100`: `count <= 100`, com mensagem
          explícita quando violada

    Returns:
        PraxisRegistry: Registry com a regra e a constraint registradas.
    """
    from praxis_engine.core.protocol import Fact, tag_of, payload_of
    from praxis_engine.core.rules import ConstraintDescriptor, PraxisRegistry, RuleDescriptor

    def increment(state, events):
        facts = []
        for event in events:
            if tag_of(event) == "INCREMENT":
                amount = payload_of(event)["amount"]
                state.context["count"] += amount
                facts.append(Fact(tag="Incremented", payload={"amount": amount}))
        return facts

    def max100(state):
        count = state.context["count"]
        return count <= 100 or f"Count {count} exceeds maximum of 100"

    registry = PraxisRegistry()
    registry.register_rule(
        RuleDescriptor(id="counter.increment", description="Soma amount ao contador", impl=increment)
    )
    registry.register_constraint(
        ConstraintDescriptor(id="counter.max100", description="Contador nunca passa de 100", impl=max100)
    )
    return registry


@pytest.fixture
def increment_event():
    """Factory de eventos `INCREMENT` com `amount` configurável."""
    from praxis_engine.core.protocol import Event

    def _make(amount: int = 1):
        return Event(tag="INCREMENT", payload={"amount": amount})

    return _make
