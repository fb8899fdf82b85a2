# conllx_utils/layers.py
"""
Реестр слоёв: имя слоя -> функция доступа к значению слоя у токена.

Реестр неизменяемый и создаётся один раз при импорте. Вызывающий код
всегда получает слой через `resolve`, поэтому новые слои добавляются
только здесь.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union

from conllu.models import Token

from conllx_utils.errors import UnknownLayerError


@dataclass(frozen=True)
class Layer:
    """Именованный слой токена, хранящийся в колонке `column`."""
    name: str
    column: str

    def __call__(self, token: Token) -> Optional[str]:
        # None - отсутствующее значение ("_" в файле)
        return token.get(self.column)


LAYERS: Mapping[str, Layer] = MappingProxyType({
    layer.name: layer for layer in (
        Layer("form", "form"),
        Layer("lemma", "lemma"),
        Layer("cpos", "cpostag"),
        Layer("pos", "postag"),
        Layer("headrel", "deprel"),
        Layer("pheadrel", "pdeprel"),
    )
})


def layer_names() -> List[str]:
    return sorted(LAYERS)


def resolve(name: str) -> Layer:
    try:
        return LAYERS[name]
    except KeyError:
        raise UnknownLayerError(name) from None


def resolve_layers(names: Union[str, Iterable[str]]) -> List[Layer]:
    """
    Разрешает список слоёв, сохраняя порядок. Строка разбивается по запятым.
    Первое неизвестное имя приводит к UnknownLayerError.
    """
    if isinstance(names, str):
        names = names.split(",")
    return [resolve(name) for name in names]
