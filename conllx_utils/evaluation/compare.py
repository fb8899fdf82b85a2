# conllx_utils/evaluation/compare.py
"""
Сравнение двух версий одного корпуса (например, gold и предсказание парсера)
по набору слоёв.
"""
from typing import Iterable, Iterator, List, Sequence, TextIO

from conllu.models import Token, TokenList
from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

from conllx_utils.config import DIFF_STYLE
from conllx_utils.core.data_structures import DiffRow, ValuePair, display
from conllx_utils.errors import LengthMismatchError
from conllx_utils.layers import Layer


def diff_positions(tokens1: Sequence[Token], tokens2: Sequence[Token],
                   layers: Sequence[Layer]) -> List[int]:
    """
    Позиции (0-based, по возрастанию), в которых отличается хотя бы один
    из слоёв `layers`. Предложения разной длины - LengthMismatchError.
    """
    if len(tokens1) != len(tokens2):
        raise LengthMismatchError(len(tokens1), len(tokens2))

    return [
        idx for idx, (token1, token2) in enumerate(zip(tokens1, tokens2))
        if any(layer(token1) != layer(token2) for layer in layers)
    ]


def diff_rows(tokens1: Sequence[Token], tokens2: Sequence[Token],
              diff_layers: Sequence[Layer], show_layers: Sequence[Layer]) -> List[DiffRow]:
    rows = []
    for idx, (token1, token2) in enumerate(zip(tokens1, tokens2)):
        rows.append(DiffRow(
            position=idx + 1,
            shown=[layer(token1) for layer in show_layers],
            pairs=[ValuePair(first=layer(token1), second=layer(token2)) for layer in diff_layers],
        ))
    return rows


def render_row(row: DiffRow) -> Text:
    line = Text(str(row.position))
    for value in row.shown:
        line.append("\t")
        line.append(display(value))
    for pair in row.pairs:
        # Выделяется каждая отличающаяся пара, а не вся строка
        style = DIFF_STYLE if pair.differs else ""
        for column in pair.columns():
            line.append("\t")
            line.append(column, style=style)
    return line


def render_diff(tokens1: Sequence[Token], tokens2: Sequence[Token],
                diff_layers: Sequence[Layer], show_layers: Sequence[Layer]) -> List[Text]:
    """
    Отчёт по всем токенам предложения: позиция, слои из `show_layers`
    (только из первого предложения), затем пары значений `diff_layers`.
    """
    return [render_row(row) for row in diff_rows(tokens1, tokens2, diff_layers, show_layers)]


class CorpusComparison:
    """
    Попарное сравнение двух потоков предложений.

    Потоки читаются синхронно; сравнение останавливается, как только
    заканчивается любой из них, хвост более длинного игнорируется.
    """

    def __init__(self, diff_layers: Sequence[Layer], show_layers: Sequence[Layer]):
        self.diff_layers = list(diff_layers)
        self.show_layers = list(show_layers)
        self.pairs = 0
        self.differing = 0

    def run(self, sentences1: Iterable[TokenList], sentences2: Iterable[TokenList]) -> Iterator[List[Text]]:
        for sentence1, sentence2 in zip(sentences1, sentences2):
            self.pairs += 1
            if not diff_positions(sentence1, sentence2, self.diff_layers):
                continue

            self.differing += 1
            yield render_diff(sentence1, sentence2, self.diff_layers, self.show_layers)


def compare_corpora(sentences1: Iterable[TokenList], sentences2: Iterable[TokenList],
                    diff_layers: Sequence[Layer], show_layers: Sequence[Layer]) -> Iterator[List[Text]]:
    return CorpusComparison(diff_layers, show_layers).run(sentences1, sentences2)


class ReportPrinter:
    """
    Печать блоков отчёта в текстовый поток.

    rich.Console раскрывает табуляции в пробелы, а отчёт должен остаться
    TSV, поэтому сегменты рендерятся в ANSI вручную.
    """

    def __init__(self, stream: TextIO, color: bool = False):
        self.stream = stream
        self.color_system = ColorSystem.STANDARD if color else None

    def format_line(self, line: Text) -> str:
        if self.color_system is None:
            return line.plain

        parts = []
        for span_text, style in iter_styled(line):
            if style:
                parts.append(Style.parse(style).render(span_text, color_system=self.color_system))
            else:
                parts.append(span_text)
        return "".join(parts)

    def print_block(self, lines: Iterable[Text]):
        for line in lines:
            self.stream.write(self.format_line(line) + "\n")
        self.stream.write("\n")


def iter_styled(line: Text):
    """Пары (текст, стиль) в порядке следования; стиль "" - без выделения."""
    plain = line.plain
    styles = [""] * len(plain)
    for span in line.spans:
        for offset in range(span.start, span.end):
            styles[offset] = str(span.style)

    start = 0
    for offset in range(1, len(plain) + 1):
        if offset == len(plain) or styles[offset] != styles[start]:
            yield plain[start:offset], styles[start]
            start = offset
