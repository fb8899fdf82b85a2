# conllx_utils/ingestion/features.py
from typing import List, Optional, Tuple

from conllx_utils.config import DEFAULT_FEATURE_SEPARATOR, FEATURE_LIST_SEPARATOR, PLACEHOLDER

# Мультикарта: порядок и повторы имён сохраняются как в исходной колонке
Features = List[Tuple[str, Optional[str]]]


def parse_features(value: str, separator: str = DEFAULT_FEATURE_SEPARATOR) -> Optional[Features]:
    """
    Разбор колонки FEATS: "case:nom|number:sg|flag".
    Элемент без разделителя - флаг со значением None.
    """
    if not value or value == PLACEHOLDER:
        return None

    features = []
    for part in value.split(FEATURE_LIST_SEPARATOR):
        if separator in part:
            name, feature_value = part.split(separator, 1)
            features.append((name, feature_value))
        else:
            features.append((part, None))
    return features


def render_features(features: Optional[Features], separator: str = DEFAULT_FEATURE_SEPARATOR) -> str:
    """Обратное к parse_features преобразование."""
    if not features:
        return PLACEHOLDER

    return FEATURE_LIST_SEPARATOR.join(
        name if feature_value is None else f"{name}{separator}{feature_value}"
        for name, feature_value in features
    )


def with_flag(features: Optional[Features], name: str) -> Features:
    """
    Новый список признаков: все прежние элементы в том же порядке плюс флаг `name`.
    Если `name` уже есть, его значения сбрасываются в None на прежних местах.
    """
    features = features or []
    if any(existing == name for existing, _ in features):
        return [(existing, None if existing == name else value) for existing, value in features]
    return features + [(name, None)]
