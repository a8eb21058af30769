# src/praxis_engine/core/__init__.py
"""
Core do Praxis Engine.

Este pacote contém a implementação canônica do engine lógico, independente
de adapters, UI ou transporte.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de dependências de UI ou serviços externos
    - orientado a diagnósticos explícitos

Componentes principais:
    - protocol      → tipos canônicos (Fact, Event, PraxisState, Diagnostic)
    - rules         → descritores e `PraxisRegistry`
    - engine        → `LogicEngine` (steps discretos)
    - reactive      → `ReactiveLogicEngine` (estado observável e derivados)
    - actors        → `ActorManager` e `TimerActor`
    - introspection → estatísticas, schema e grafo do registry
    - config        → resolução de configuração (merge, validação, hashing)
    - journal       → log estruturado de eventos do engine

Princípios fundamentais:
    - Falhas de regras e constraints são dados (diagnósticos)
    - Erros de setup são exceções tipadas
    - Estado devolvido a chamadores é sempre isolado

Limites explícitos:
    - Não persiste estado
    - Não transporta eventos pela rede
    - Não renderiza interfaces
"""
