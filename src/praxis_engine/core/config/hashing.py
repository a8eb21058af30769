# src/praxis_engine/core/config/hashing.py
"""
Hashing canônico do Praxis Engine.

Este módulo gera hashes determinísticos de estruturas serializáveis,
utilizados para:
    - identidade da configuração efetiva
    - fingerprint do schema do registry (introspecção)

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Estruturas equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_hash(payload: Any) -> str:
    """
    Gera o hash SHA-256 da serialização JSON canônica de `payload`.

    Valores não serializáveis em JSON são representados por `str(value)`.
    """
    canonical_json = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva do engine.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return compute_hash(config)
