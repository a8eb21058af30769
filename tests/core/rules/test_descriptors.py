# tests/core/rules/test_descriptors.py
"""
Testes de validação estrutural dos descritores.

Descritores inválidos (id vazio, impl não chamável) são rejeitados na
criação, antes de chegar ao registry.
"""

import dataclasses

import pytest

from praxis_engine.core.rules import ConstraintDescriptor, RuleDescriptor


def test_rule_requires_non_empty_id():
    with pytest.raises(ValueError):
        RuleDescriptor(id="", description="x", impl=lambda s, e: [])
    with pytest.raises(ValueError):
        RuleDescriptor(id="   ", description="x", impl=lambda s, e: [])


def test_rule_requires_callable_impl():
    with pytest.raises(TypeError):
        RuleDescriptor(id="r", description="x", impl="not callable")


def test_constraint_requires_callable_impl():
    with pytest.raises(TypeError):
        ConstraintDescriptor(id="c", description="x", impl=None)


def test_descriptors_are_frozen():
    rule = RuleDescriptor(id="r", description="x", impl=lambda s, e: [], meta={"depends_on": ["a"]})

    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.id = "other"
    assert rule.meta == {"depends_on": ["a"]}
