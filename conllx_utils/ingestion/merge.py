# conllx_utils/ingestion/merge.py
from pathlib import Path
from typing import Iterable, Iterator, Union

from conllu.models import TokenList

from conllx_utils.config import DEFAULT_FEATURE_SEPARATOR
from conllx_utils.ingestion.reader import read_sentences


def merge_corpora(paths: Iterable[Union[str, Path]],
                  feature_separator: str = DEFAULT_FEATURE_SEPARATOR) -> Iterator[TokenList]:
    """
    Склейка нескольких корпусов: порядок файлов и предложений сохраняется.
    Следующий файл открывается только после исчерпания предыдущего.
    """
    for path in paths:
        yield from read_sentences(path, feature_separator)
