"""
conllx_utils: утилиты для корпусов с разметкой зависимостей в формате CoNLL-X.

* conllx-compare - сравнение двух версий корпуса по слоям
* conllx-grep - поиск и пометка токенов по регулярному выражению
* conllx-merge - склейка корпусов
"""
from .errors import (ConllxUtilsError, CorpusParseError, LengthMismatchError,
                     PatternError, UnknownLayerError)
from .layers import LAYERS, Layer, resolve, resolve_layers

__version__ = "0.1.0"
