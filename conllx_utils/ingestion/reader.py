# conllx_utils/ingestion/reader.py
import logging
import sys
from io import StringIO
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Union

from conllu import parse_incr
from conllu.exceptions import ParseException
from conllu.models import TokenList
from conllu.parser import parse_id_value, parse_nullable_value

from conllx_utils.config import CONLLX_FIELDS, DEFAULT_FEATURE_SEPARATOR, STDIO_PATH
from conllx_utils.errors import CorpusParseError
from conllx_utils.ingestion.features import parse_features

logger = logging.getLogger(__name__)

# Комментарии без "=" (например "# sent 12") conllu по умолчанию отбрасывает
METADATA_PARSERS = {
    "__fallback__": lambda key, value: (key, value),
}


def parse_token_id(line: List[str], i: int) -> int:
    # ID разбирается первым; conllu сам не проверяет число колонок
    # и делит строку ещё и по двум пробелам подряд
    if len(line) != len(CONLLX_FIELDS):
        raise ParseException(f"Expected {len(CONLLX_FIELDS)} columns, got {len(line)}")
    return parse_id_value(line[i])


def conllx_field_parsers(feature_separator: str = DEFAULT_FEATURE_SEPARATOR) -> dict:
    """
    Парсеры колонок CoNLL-X для conllu.parse_incr.
    Все колонки, кроме ID и FEATS, - строки или None, чтобы HEAD/PHEAD
    сериализовались обратно без изменений.
    """
    parsers = {
        field: (lambda line, i: parse_nullable_value(line[i]))
        for field in CONLLX_FIELDS
    }
    parsers["id"] = parse_token_id
    parsers["feats"] = lambda line, i: parse_features(line[i], feature_separator)
    return parsers


def iter_sentences(stream: TextIO, source: str, field_parsers: dict) -> Iterator[TokenList]:
    """
    Ленивый разбор потока. Ошибка разбора превращается в CorpusParseError
    с номером предложения (с 1).
    """
    sentences = parse_incr(
        stream,
        fields=CONLLX_FIELDS,
        field_parsers=field_parsers,
        metadata_parsers=METADATA_PARSERS,
    )

    number = 0
    try:
        for number, sentence in enumerate(sentences, start=1):
            yield sentence
    except (ParseException, UnicodeDecodeError) as e:
        # number - последнее успешно прочитанное предложение
        raise CorpusParseError(source, number + 1, str(e)) from e


def parse_conllx(data: str, feature_separator: str = DEFAULT_FEATURE_SEPARATOR) -> List[TokenList]:
    """Разбор CoNLL-X из строки (удобно для тестов и небольших фрагментов)."""
    return list(iter_sentences(StringIO(data), "<string>", conllx_field_parsers(feature_separator)))


class CorpusReader:
    """
    Ленивый источник предложений CoNLL-X.

    Файл открывается при входе в контекст, предложения читаются по одному:
    в памяти никогда не держится весь корпус.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None,
                 feature_separator: str = DEFAULT_FEATURE_SEPARATOR):
        self.path = None if path is None or str(path) == STDIO_PATH else Path(path)
        self.source = "<stdin>" if self.path is None else str(self.path)
        self.field_parsers = conllx_field_parsers(feature_separator)
        self._file = None

    def __enter__(self) -> "CorpusReader":
        if self.path is None:
            self._file = sys.stdin
        else:
            self._file = open(self.path, 'r', encoding='utf-8')
        logger.info(f"Reading sentences from {self.source}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file is not None and self._file is not sys.stdin:
            self._file.close()
        self._file = None

    def __iter__(self) -> Iterator[TokenList]:
        if self._file is None:
            raise RuntimeError("CorpusReader must be used as a context manager")
        return iter_sentences(self._file, self.source, self.field_parsers)


def read_sentences(path: Optional[Union[str, Path]] = None,
                   feature_separator: str = DEFAULT_FEATURE_SEPARATOR) -> Iterator[TokenList]:
    """Генератор предложений из файла; файл закрывается по исчерпании."""
    with CorpusReader(path, feature_separator) as reader:
        yield from reader
