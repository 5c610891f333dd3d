"""
Utilitários de runtime do serviço

- setup_logging(): carrega config/logging.yml; sem o arquivo, usa o logging básico
- get_project_root(): caminho absoluto da raiz do projeto
"""
from __future__ import annotations

import logging
import logging.config
import os
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from consultor.settings import settings

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_project_root() -> str:
    """Retorna o caminho absoluto da raiz do projeto (pai do pacote consultor)."""
    here = os.path.dirname(__file__)
    return os.path.abspath(os.path.join(here, ".."))


def _load_yaml(path: str) -> Dict[str, Any]:
    """Carrega um arquivo YAML. Arquivo ausente ou conteúdo não-dict retorna {}."""
    if not os.path.exists(path):
        return {}
    yaml = YAML(typ="safe")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.load(f) or {}
    return data if isinstance(data, dict) else {}


def setup_logging(
    config_rel_path: str = os.path.join("config", "logging.yml"),
    level: Optional[str] = None,
) -> None:
    """Inicializa o logging.

    - Se existir `config/logging.yml` (relativo à raiz do projeto), aplica via dictConfig.
    - Se o arquivo não existir ou for inválido, cai no logging.basicConfig.
    - O nível vindo de settings (LOG_LEVEL) sempre sobrescreve o nível do root.

    Args:
        config_rel_path: caminho do YAML relativo à raiz do projeto.
        level: nível explícito (None usa settings.log_level).
    """
    level_name = (level or settings.log_level).upper()
    cfg_path = os.path.join(get_project_root(), config_rel_path)
    try:
        data = _load_yaml(cfg_path)
        if data:
            logging.config.dictConfig(data)
            logging.getLogger().setLevel(level_name)
            return
    except (OSError, YAMLError, ValueError, TypeError) as e:
        logging.basicConfig(level=level_name, format=DEFAULT_LOG_FORMAT)
        logging.getLogger(__name__).warning(f"logging.yml inválido ({e}); usando configuração básica")
        return
    logging.basicConfig(level=level_name, format=DEFAULT_LOG_FORMAT)
