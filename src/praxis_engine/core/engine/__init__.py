# src/praxis_engine/core/engine/__init__.py
"""
Engine discreto do Praxis Engine.

Este pacote contém o `LogicEngine`, responsável por **avaliar** regras e
constraints registradas sobre um context persistente, um step por vez.

Princípios fundamentais:
    - Cada step executa a fase de regras e depois a fase de constraints
    - A ordem de avaliação é a ordem de registro
    - Falhas de regras/constraints viram diagnósticos, nunca exceções
    - O context é propriedade exclusiva do engine

Invariantes:
    - Um step nunca é suspenso no meio de uma fase
    - Todas as constraints são avaliadas, mesmo após violações
    - Fatos e diagnósticos de um step não vazam para o seguinte

Limites explícitos:
    - Não persiste estado
    - Não transporta eventos pela rede
    - Não possui retry: chamadores reemitem `step()` se necessário
"""

from .engine import LogicEngine, create_praxis_engine

__all__ = ["LogicEngine", "create_praxis_engine"]
