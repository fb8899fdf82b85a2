# conllx_utils/search/grep.py
import re
from re import Pattern
from typing import Iterable, Iterator, List, Optional

from conllu.models import TokenList

from conllx_utils.errors import PatternError
from conllx_utils.ingestion.features import with_flag
from conllx_utils.layers import Layer


def compile_pattern(expr: str) -> Pattern:
    try:
        return re.compile(expr)
    except re.error as e:
        raise PatternError(expr, str(e)) from e


def iter_matches(sentence: TokenList, layer: Layer, pattern: Pattern) -> Iterator[int]:
    """
    Позиции токенов (0-based), у которых значение слоя найдено регуляркой.
    Поиск без привязки к началу строки; токены без значения слоя не совпадают.
    """
    for idx, token in enumerate(sentence):
        value = layer(token)
        if value is not None and pattern.search(value):
            yield idx


def match_positions(sentence: TokenList, layer: Layer, pattern: Pattern) -> List[int]:
    return list(iter_matches(sentence, layer, pattern))


def sentence_matches(sentence: TokenList, layer: Layer, pattern: Pattern) -> bool:
    # Достаточно первого совпадения
    return next(iter_matches(sentence, layer, pattern), None) is not None


def annotate(sentence: TokenList, positions: Iterable[int], feature: str) -> TokenList:
    """
    Добавляет токенам в `positions` признак-флаг `feature` (без значения).
    Остальные признаки и их порядок не меняются; повторный вызов ничего не меняет.
    """
    for idx in positions:
        token = sentence[idx]
        token["feats"] = with_flag(token.get("feats"), feature)
    return sentence


class SentenceGrep:
    """
    Фильтр потока предложений по регулярке на одном слое.

    Без `mark` пропускает только предложения с совпадениями, без изменений.
    С `mark` пропускает все предложения, помечая совпавшие токены флагом.
    """

    def __init__(self, layer: Layer, pattern: Pattern, mark: Optional[str] = None):
        self.layer = layer
        self.pattern = pattern
        self.mark = mark
        self.sentences = 0
        self.matched_sentences = 0
        self.matched_tokens = 0

    def process(self, sentence: TokenList) -> Optional[TokenList]:
        self.sentences += 1

        if self.mark is None:
            if not sentence_matches(sentence, self.layer, self.pattern):
                return None
            self.matched_sentences += 1
            return sentence

        positions = match_positions(sentence, self.layer, self.pattern)
        if positions:
            self.matched_sentences += 1
            self.matched_tokens += len(positions)
        return annotate(sentence, positions, self.mark)

    def run(self, sentences: Iterable[TokenList]) -> Iterator[TokenList]:
        for sentence in sentences:
            result = self.process(sentence)
            if result is not None:
                yield result


def grep_sentences(sentences: Iterable[TokenList], layer: Layer, pattern: Pattern,
                   mark: Optional[str] = None) -> Iterator[TokenList]:
    return SentenceGrep(layer, pattern, mark).run(sentences)
