# conllx_utils/ingestion/writer.py
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from conllu.models import Token, TokenList

from conllx_utils.config import DEFAULT_FEATURE_SEPARATOR, STDIO_PATH
from conllx_utils.ingestion.features import render_features

logger = logging.getLogger(__name__)


def serialize_sentence(sentence: TokenList, feature_separator: str = DEFAULT_FEATURE_SEPARATOR) -> str:
    """
    Сериализует предложение в CoNLL-X. FEATS рендерим сами: conllu
    записывает флаг (None) как "name=_", а нам нужно голое имя.
    """
    tokens = [
        Token({**token, "feats": render_features(token["feats"], feature_separator)})
        if "feats" in token else token
        for token in sentence
    ]
    return TokenList(tokens, sentence.metadata).serialize()


class SentenceWriter:
    """Приёмник предложений: файл или stdout (путь None или "-")."""

    def __init__(self, path: Optional[Union[str, Path]] = None,
                 feature_separator: str = DEFAULT_FEATURE_SEPARATOR):
        self.path = None if path is None or str(path) == STDIO_PATH else Path(path)
        self.target = "<stdout>" if self.path is None else str(self.path)
        self.feature_separator = feature_separator
        self.count = 0
        self._file = None

    def __enter__(self) -> "SentenceWriter":
        if self.path is None:
            self._file = sys.stdout
        else:
            self._file = open(self.path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file is None:
            return
        if self._file is sys.stdout:
            self._file.flush()
        else:
            self._file.close()
        self._file = None
        logger.info(f"Wrote {self.count} sentences to {self.target}")

    def write(self, sentence: TokenList):
        self._file.write(serialize_sentence(sentence, self.feature_separator))
        self.count += 1
