# src/praxis_engine/core/introspection/introspector.py
"""
Introspecção do registry.

Este módulo expõe uma visão somente-leitura do `PraxisRegistry` para
ferramentas externas (documentação, visualização, auditoria):

    - estatísticas (contagens e ids em ordem de registro)
    - schema serializável com fingerprint canônico (`schema_hash`)
    - grafo de regras/constraints com arestas declaradas em `meta`
    - exportação do grafo em DOT (Graphviz) e Mermaid
    - busca textual por id/descrição
    - persistência do schema em JSON ou YAML

Arestas do grafo são inferidas apenas de metadados declarados:
    - `rule.meta["depends_on"]`      → aresta `depends-on` (dep → regra)
    - `constraint.meta["constrains"]` → aresta `constrains` (constraint → alvo)

Limites explícitos:
    - Não executa regras nem constraints
    - Não modifica o registry
    - Não renderiza imagens (apenas texto DOT/Mermaid)
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml  # PyYAML

from praxis_engine.core.config.hashing import compute_hash
from praxis_engine.core.exceptions import SchemaFormatError
from praxis_engine.core.protocol import PROTOCOL_VERSION
from praxis_engine.core.rules.descriptors import ConstraintDescriptor, RuleDescriptor
from praxis_engine.core.rules.registry import PraxisRegistry

EDGE_DEPENDS_ON = "depends-on"
EDGE_CONSTRAINS = "constrains"

_SCHEMA_SUFFIXES = {".json", ".yaml", ".yml"}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _mermaid_id(node_id: str) -> str:
    return re.sub(r"\W", "_", node_id)


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _json_safe(payload: Any) -> Any:
    return json.loads(json.dumps(payload, default=str))


class RegistryIntrospector:
    """Visão somente-leitura de um `PraxisRegistry`."""

    def __init__(self, registry: PraxisRegistry):
        self.registry = registry

    # -----------------------------
    # Estatísticas e schema
    # -----------------------------
    def get_stats(self) -> Dict[str, Any]:
        rule_ids = self.registry.get_rule_ids()
        constraint_ids = self.registry.get_constraint_ids()
        return {
            "rule_count": len(rule_ids),
            "constraint_count": len(constraint_ids),
            "module_count": self.registry.module_count,
            "rule_ids": rule_ids,
            "constraint_ids": constraint_ids,
        }

    def generate_schema(self, protocol_version: str = PROTOCOL_VERSION) -> Dict[str, Any]:
        """
        Gera a representação serializável do registry.

        O schema contém versão do protocolo, regras e constraints (id,
        descrição, tipo e meta, em ordem de registro), contagens e um
        `schema_hash` calculado sobre todo o restante do documento.

        Invariantes:
            - Registries com o mesmo conteúdo produzem o mesmo `schema_hash`
            - Implementações (`impl`) nunca fazem parte do schema

        Args:
            protocol_version (str): Versão do protocolo registrada no schema.

        Returns:
            Dict[str, Any]: Schema do registry.
        """
        rules = [
            {"id": r.id, "description": r.description, "type": "rule", "meta": dict(r.meta)}
            for r in self.registry.get_all_rules()
        ]
        constraints = [
            {"id": c.id, "description": c.description, "type": "constraint", "meta": dict(c.meta)}
            for c in self.registry.get_all_constraints()
        ]
        schema: Dict[str, Any] = {
            "protocol_version": protocol_version,
            "rules": rules,
            "constraints": constraints,
            "meta": {
                "rule_count": len(rules),
                "constraint_count": len(constraints),
            },
        }
        schema["schema_hash"] = compute_hash(schema)
        return schema

    # -----------------------------
    # Grafo
    # -----------------------------
    def generate_graph(self) -> Dict[str, Any]:
        nodes: List[Dict[str, Any]] = []
        edges: List[Dict[str, str]] = []

        for rule in self.registry.get_all_rules():
            nodes.append({"id": rule.id, "type": "rule", "description": rule.description, "meta": dict(rule.meta)})
            for dep in _as_list(rule.meta.get("depends_on")):
                edges.append({"from": str(dep), "to": rule.id, "type": EDGE_DEPENDS_ON})

        for constraint in self.registry.get_all_constraints():
            nodes.append(
                {
                    "id": constraint.id,
                    "type": "constraint",
                    "description": constraint.description,
                    "meta": dict(constraint.meta),
                }
            )
            for target in _as_list(constraint.meta.get("constrains")):
                edges.append({"from": constraint.id, "to": str(target), "type": EDGE_CONSTRAINS})

        return {
            "nodes": nodes,
            "edges": edges,
            "meta": {
                "node_count": len(nodes),
                "rule_count": sum(1 for n in nodes if n["type"] == "rule"),
                "constraint_count": sum(1 for n in nodes if n["type"] == "constraint"),
            },
        }

    def export_dot(self) -> str:
        """Exporta o grafo no formato DOT (Graphviz)."""
        graph = self.generate_graph()
        lines = [
            "digraph PraxisRegistry {",
            "  rankdir=TB;",
            "  node [shape=box, style=rounded];",
            "",
        ]

        for node in graph["nodes"]:
            is_rule = node["type"] == "rule"
            shape = "box" if is_rule else "diamond"
            color = "lightblue" if is_rule else "lightcoral"
            label = f"{_dot_escape(node['id'])}\\n{_dot_escape(node['description'])}"
            lines.append(
                f'  "{_dot_escape(node["id"])}" [label="{label}", shape={shape}, style=filled, fillcolor={color}];'
            )

        lines.append("")

        for edge in graph["edges"]:
            style = "dashed" if edge["type"] == EDGE_CONSTRAINS else "solid"
            lines.append(
                f'  "{_dot_escape(edge["from"])}" -> "{_dot_escape(edge["to"])}" '
                f'[label="{edge["type"]}", style={style}];'
            )

        lines.append("}")
        return "\n".join(lines)

    def export_mermaid(self) -> str:
        """
        Exporta o grafo no formato Mermaid (`graph TB`).

        Ids com caracteres fora de `\\w` (ex.: `counter.increment`) viram
        identificadores Mermaid com `_`; o id original permanece no rótulo.
        """
        graph = self.generate_graph()
        lines = ["graph TB"]

        for node in graph["nodes"]:
            label = f"{node['id']}<br/>{node['description']}".replace('"', "#quot;")
            if node["type"] == "rule":
                lines.append(f'  {_mermaid_id(node["id"])}["{label}"]')
            else:
                lines.append(f'  {_mermaid_id(node["id"])}{{"{label}"}}')

        lines.append("")

        for edge in graph["edges"]:
            arrow = "-.->|constrains|" if edge["type"] == EDGE_CONSTRAINS else f"-->|{edge['type']}|"
            lines.append(f"  {_mermaid_id(edge['from'])} {arrow} {_mermaid_id(edge['to'])}")

        return "\n".join(lines)

    # -----------------------------
    # Consulta
    # -----------------------------
    def get_rule_info(self, rule_id: str) -> Optional[RuleDescriptor]:
        return self.registry.get_rule(rule_id)

    def get_constraint_info(self, constraint_id: str) -> Optional[ConstraintDescriptor]:
        return self.registry.get_constraint(constraint_id)

    def search_rules(self, query: str) -> List[RuleDescriptor]:
        """Regras cujo id ou descrição contém `query` (sem diferenciar caixa)."""
        q = query.lower()
        return [r for r in self.registry.get_all_rules() if q in r.id.lower() or q in r.description.lower()]

    def search_constraints(self, query: str) -> List[ConstraintDescriptor]:
        q = query.lower()
        return [
            c for c in self.registry.get_all_constraints() if q in c.id.lower() or q in c.description.lower()
        ]

    # -----------------------------
    # Persistência do schema
    # -----------------------------
    def save_schema(self, path: Union[str, Path], *, protocol_version: str = PROTOCOL_VERSION) -> Path:
        """
        Grava o schema do registry em disco (JSON ou YAML, pelo sufixo).

        Valores de `meta` não serializáveis são gravados como `str(value)`.

        Raises:
            SchemaFormatError: Se o sufixo não for `.json`, `.yaml` ou `.yml`.
        """
        target = Path(path)
        suffix = target.suffix.lower()
        if suffix not in _SCHEMA_SUFFIXES:
            raise SchemaFormatError(
                f"Formato de schema não suportado: {target.suffix}",
                details={"path": str(target)},
                hint="Use .json, .yaml ou .yml",
            )

        schema = _json_safe(self.generate_schema(protocol_version))
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as f:
            if suffix == ".json":
                json.dump(schema, f, ensure_ascii=False, indent=2, sort_keys=True)
            else:
                yaml.safe_dump(schema, f, allow_unicode=True, sort_keys=True)
        return target

    @staticmethod
    def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
        return load_schema(path)


def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê um schema gravado por `save_schema` e confere sua integridade.

    Raises:
        FileNotFoundError: Se o arquivo não existir.
        SchemaFormatError: Se o sufixo não for suportado, a raiz não for um
            dicionário, faltar `rules`/`constraints` ou o `schema_hash`
            não corresponder ao conteúdo.
    """
    source = Path(path)
    suffix = source.suffix.lower()
    if suffix not in _SCHEMA_SUFFIXES:
        raise SchemaFormatError(
            f"Formato de schema não suportado: {source.suffix}",
            details={"path": str(source)},
        )

    with source.open("r", encoding="utf-8") as f:
        data = json.load(f) if suffix == ".json" else yaml.safe_load(f)

    if not isinstance(data, dict):
        raise SchemaFormatError(
            f"Schema root deve ser dict, recebido: {type(data).__name__}",
            details={"path": str(source)},
        )
    missing = [key for key in ("rules", "constraints") if key not in data]
    if missing:
        raise SchemaFormatError(
            f"Schema sem as chaves obrigatórias: {', '.join(missing)}",
            details={"path": str(source), "missing": missing},
        )

    expected = data.get("schema_hash")
    if expected is not None:
        body = {k: v for k, v in data.items() if k != "schema_hash"}
        actual = compute_hash(body)
        if actual != expected:
            raise SchemaFormatError(
                "schema_hash não corresponde ao conteúdo do schema",
                details={"path": str(source), "expected": expected, "actual": actual},
            )

    return data


def create_introspector(registry: PraxisRegistry) -> RegistryIntrospector:
    return RegistryIntrospector(registry)
