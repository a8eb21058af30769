# tests/core/introspection/test_introspector.py
"""
Testes do RegistryIntrospector.

Os testes asseguram que:
- estatísticas refletem o conteúdo e a ordem de registro
- o schema é determinístico e não expõe implementações
- arestas do grafo vêm apenas de `depends_on` / `constrains`
- as exportações DOT e Mermaid contêm nós e arestas esperados
- a busca textual ignora caixa
"""

import pytest

try:
    from praxis_engine.core.introspection import RegistryIntrospector, create_introspector
    from praxis_engine.core.protocol import PROTOCOL_VERSION
    from praxis_engine.core.rules import ConstraintDescriptor, PraxisModule, PraxisRegistry, RuleDescriptor
except Exception as e:  # noqa: BLE001
    RegistryIntrospector = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing introspection. Implement:\n"
            "- src/praxis_engine/core/introspection/introspector.py (RegistryIntrospector)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _noop_rule(state, events):
    return []


def _ok_constraint(state):
    return True


def _build_registry():
    registry = PraxisRegistry()
    registry.register_module(
        PraxisModule(
            name="counter",
            rules=[
                RuleDescriptor(id="counter.increment", description="Increment the counter", impl=_noop_rule),
                RuleDescriptor(
                    id="counter.audit",
                    description="Audit increments",
                    impl=_noop_rule,
                    meta={"depends_on": "counter.increment"},
                ),
            ],
            constraints=[
                ConstraintDescriptor(
                    id="counter.max100",
                    description="Count never exceeds 100",
                    impl=_ok_constraint,
                    meta={"constrains": ["counter.increment"]},
                )
            ],
        )
    )
    return registry


@pytest.fixture
def introspector():
    _require_imports()
    return create_introspector(_build_registry())


def test_stats(introspector):
    assert introspector.get_stats() == {
        "rule_count": 2,
        "constraint_count": 1,
        "module_count": 1,
        "rule_ids": ["counter.increment", "counter.audit"],
        "constraint_ids": ["counter.max100"],
    }


def test_schema_shape_and_hash_is_deterministic(introspector):
    schema = introspector.generate_schema()
    again = RegistryIntrospector(_build_registry()).generate_schema()

    assert schema["protocol_version"] == PROTOCOL_VERSION
    assert [r["id"] for r in schema["rules"]] == ["counter.increment", "counter.audit"]
    assert schema["rules"][0] == {
        "id": "counter.increment",
        "description": "Increment the counter",
        "type": "rule",
        "meta": {},
    }
    assert schema["constraints"][0]["type"] == "constraint"
    assert schema["meta"] == {"rule_count": 2, "constraint_count": 1}
    assert len(schema["schema_hash"]) == 64
    assert schema["schema_hash"] == again["schema_hash"]


def test_schema_hash_changes_with_content(introspector):
    before = introspector.generate_schema()["schema_hash"]

    introspector.registry.register_rule(RuleDescriptor(id="extra", description="", impl=_noop_rule))

    assert introspector.generate_schema()["schema_hash"] != before
    assert introspector.generate_schema(protocol_version="2.0.0")["protocol_version"] == "2.0.0"


def test_graph_nodes_and_declared_edges(introspector):
    graph = introspector.generate_graph()

    assert [n["id"] for n in graph["nodes"]] == ["counter.increment", "counter.audit", "counter.max100"]
    assert graph["edges"] == [
        {"from": "counter.increment", "to": "counter.audit", "type": "depends-on"},
        {"from": "counter.max100", "to": "counter.increment", "type": "constrains"},
    ]
    assert graph["meta"] == {"node_count": 3, "rule_count": 2, "constraint_count": 1}


def test_graph_without_metadata_has_no_edges():
    _require_imports()

    registry = PraxisRegistry()
    registry.register_rule(RuleDescriptor(id="a", description="", impl=_noop_rule))

    assert create_introspector(registry).generate_graph()["edges"] == []


def test_export_dot(introspector):
    dot = introspector.export_dot()

    assert dot.startswith("digraph PraxisRegistry {")
    assert dot.rstrip().endswith("}")
    assert '"counter.increment" [label="counter.increment\\nIncrement the counter", shape=box' in dot
    assert '"counter.max100" [label=' in dot and "shape=diamond" in dot
    assert '"counter.increment" -> "counter.audit" [label="depends-on", style=solid];' in dot
    assert '"counter.max100" -> "counter.increment" [label="constrains", style=dashed];' in dot


def test_export_mermaid(introspector):
    mermaid = introspector.export_mermaid()
    lines = mermaid.splitlines()

    assert lines[0] == "graph TB"
    assert '  counter_increment["counter.increment<br/>Increment the counter"]' in lines
    assert '  counter_max100{"counter.max100<br/>Count never exceeds 100"}' in lines
    assert "  counter_increment -->|depends-on| counter_audit" in lines
    assert "  counter_max100 -.->|constrains| counter_increment" in lines


def test_lookup_and_search(introspector):
    assert introspector.get_rule_info("counter.audit").description == "Audit increments"
    assert introspector.get_rule_info("missing") is None
    assert introspector.get_constraint_info("counter.max100").meta == {"constrains": ["counter.increment"]}

    assert [r.id for r in introspector.search_rules("AUDIT")] == ["counter.audit"]
    assert [r.id for r in introspector.search_rules("counter")] == ["counter.increment", "counter.audit"]
    assert [c.id for c in introspector.search_constraints("exceeds")] == ["counter.max100"]
    assert introspector.search_constraints("nothing") == []
