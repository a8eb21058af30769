# src/praxis_engine/core/introspection/__init__.py
"""Introspecção, exportação de grafo e persistência de schema do registry."""

from .introspector import RegistryIntrospector, create_introspector, load_schema

__all__ = ["RegistryIntrospector", "create_introspector", "load_schema"]
