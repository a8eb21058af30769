# src/praxis_engine/core/config/merge.py
"""
Resolução da configuração efetiva do Praxis Engine.

Duas operações compõem a resolução:
    - deep_merge        → aplica overrides sobre os defaults
    - validate_switches → valida as seções de switches (`rules`,
                          `constraints`, `actors`) do resultado

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito, com o caminho da chave
      (ex.: `rules.counter.audit.enabled`)

Formato das seções de switches:
    rules | constraints | actors:
        <id>:
            enabled: bool   # opcional; ausente = habilitado

Decisões arquiteturais:
    - `enabled` só aceita booleano (`"false"` e `0` são rejeitados)
    - Seções e itens `null` equivalem a vazios
    - Outras chaves dentro de um item são preservadas sem validação

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Nenhum input é mutado durante o processo
    - Conflitos estruturais interrompem o merge
"""

from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigTypeConflictError, InvalidSwitchError

SWITCH_SECTIONS: Tuple[str, ...] = ("rules", "constraints", "actors")


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, path: str = "") -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.
        path (str): Prefixo do caminho usado nas mensagens de conflito.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts em '{path or '<raiz>'}', recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]
        key_path = _join(path, key)

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value, path=key_path)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # null no base aceita qualquer override
        if base_value is not None and type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key_path}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result


def validate_switches(config: Optional[Dict[str, Any]]) -> None:
    """
    Valida as seções `rules`, `constraints` e `actors` da configuração.

    Raises:
        InvalidSwitchError: Se uma seção ou item não for mapeamento (ou
            `null`), ou se `enabled` não for booleano.
    """
    for section in SWITCH_SECTIONS:
        section_cfg = (config or {}).get(section)
        if section_cfg is None:
            continue
        if not isinstance(section_cfg, dict):
            raise InvalidSwitchError(
                f"Seção '{section}' deve ser um mapeamento por id, recebido: {type(section_cfg).__name__}"
            )

        for item_id, item_cfg in section_cfg.items():
            item_path = _join(section, item_id)
            if item_cfg is None:
                continue
            if not isinstance(item_cfg, dict):
                raise InvalidSwitchError(
                    f"Item '{item_path}' deve ser um mapeamento, recebido: {type(item_cfg).__name__}"
                )
            if "enabled" in item_cfg and not isinstance(item_cfg["enabled"], bool):
                raise InvalidSwitchError(
                    f"'{item_path}.enabled' deve ser booleano, recebido: {item_cfg['enabled']!r}"
                )
