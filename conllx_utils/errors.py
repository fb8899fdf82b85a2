# conllx_utils/errors.py
"""
Исключения утилит. Все фатальные: команда логирует сообщение и
завершается с ненулевым кодом.
"""


class ConllxUtilsError(Exception):
    """Базовый класс ошибок conllx_utils."""


class UnknownLayerError(ConllxUtilsError):
    def __init__(self, name: str):
        super().__init__(f"Unknown layer: {name}")
        self.name = name


class PatternError(ConllxUtilsError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class CorpusParseError(ConllxUtilsError):
    """Предложение не удалось разобрать. Хранит источник и номер предложения (с 1)."""

    def __init__(self, source: str, sentence_number: int, reason: str):
        super().__init__(f"{source}: sentence {sentence_number}: {reason}")
        self.source = source
        self.sentence_number = sentence_number
        self.reason = reason


class LengthMismatchError(ConllxUtilsError):
    def __init__(self, len1: int, len2: int):
        super().__init__(f"Different number of tokens: {len1} {len2}")
        self.len1 = len1
        self.len2 = len2


class ConfigError(ConllxUtilsError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load settings from {path}: {reason}")
        self.path = path
        self.reason = reason
