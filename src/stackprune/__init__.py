import logging.config
import os
from typing import Iterable

import yaml

from . import formatters
from . import filters
from . import tools
from .config import (
    ConfigSource,
    MappingSource,
    EnvironSource,
    ChainSource,
    PropertiesSource,
    PRUNING_ENABLED_KEY,
    pruning_enabled
)
from .pruner import StackTracePruner, DEFAULT_KEYWORDS
from .styles import TraceStyle, JAVA, PYTHON


def dict_config(config: dict):
    logging.config.dictConfig(config)


def yaml_config(path: str | os.PathLike):
    """Configures logging from a YAML file with the same layout as a dict-config."""
    with open(path, "r", encoding="utf-8") as file:
        dict_config(yaml.safe_load(file))


def render(exc: BaseException, keywords: Iterable[str] = DEFAULT_KEYWORDS, config: ConfigSource | None = None) -> list[str]:
    """Renders the exception as a pruned list of lines."""
    return StackTracePruner(keywords=keywords, config=config).render(exc)
