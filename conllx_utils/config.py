# conllx_utils/config.py
import logging
from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from conllx_utils.errors import ConfigError

logger = logging.getLogger(__name__)

# Колонки формата CoNLL-X в порядке следования в файле
CONLLX_FIELDS = (
    "id", "form", "lemma", "cpostag", "postag",
    "feats", "head", "deprel", "phead", "pdeprel",
)

# Отсутствующее значение во внешнем представлении
PLACEHOLDER = "_"

# Путь "-" означает stdin/stdout
STDIO_PATH = "-"

FEATURE_LIST_SEPARATOR = "|"
DEFAULT_FEATURE_SEPARATOR = ":"

DEFAULT_DIFF_LAYERS = ["headrel"]
DEFAULT_SHOW_LAYERS = ["form"]
DEFAULT_GREP_LAYER = "form"

# Стиль rich для отличающихся колонок в отчёте compare
DIFF_STYLE = "red"

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class Settings(BaseModel):
    """
    Настройки утилит. Загружаются из YAML, параметры командной строки
    имеют приоритет.
    """
    diff_layers: List[str] = DEFAULT_DIFF_LAYERS
    show_layers: List[str] = DEFAULT_SHOW_LAYERS
    grep_layer: str = DEFAULT_GREP_LAYER
    feature_separator: str = DEFAULT_FEATURE_SEPARATOR
    color: Literal["auto", "always", "never"] = "auto"
    log_level: str = "INFO"

    @field_validator("diff_layers", "show_layers", mode="before")
    @classmethod
    def split_layer_list(cls, value):
        # В YAML допускается и список, и строка "form,lemma";
        # пустые имена остаются и отвергаются при разрешении слоёв, как в CLI
        if isinstance(value, str):
            return value.split(",")
        return value

    @field_validator("feature_separator")
    @classmethod
    def check_feature_separator(cls, value: str) -> str:
        if not value or value == FEATURE_LIST_SEPARATOR:
            raise ValueError(f"Invalid feature separator: '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Читает настройки из YAML-файла. Без пути возвращает значения по умолчанию.
    """
    if path is None:
        return Settings()

    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(str(path), e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    try:
        settings = Settings(**raw)
    except ValidationError as e:
        raise ConfigError(str(path), str(e)) from e

    logger.info(f"Loaded settings from {path}")
    return settings
