# src/praxis_engine/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Praxis Engine.

As exceções aqui definidas representam violações estruturais explícitas
durante o carregamento e a resolução da configuração, e não erros de
execução de regras ou constraints.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa diagnóstico de step
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Praxis Engine.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas de setup e diagnósticos de runtime
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"rules": {"increment": {"enabled": true}}}
        - override: {"rules": "off"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSwitchError(ConfigError):
    """
    Exceção levantada quando uma seção de switches (`rules`, `constraints`,
    `actors`) está malformada ou quando `<section>.<id>.enabled` não é
    booleano.
    """
