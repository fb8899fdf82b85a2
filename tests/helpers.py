from conllx_utils.ingestion.reader import parse_conllx


def conllx(*rows, comments=()):
    """
    Текст CoNLL-X из строк, где колонки разделены пробелами
    (в тестах так нагляднее, чем табуляция).
    """
    lines = [f"# {comment}" for comment in comments]
    lines += ["\t".join(row.split()) for row in rows]
    return "\n".join(lines) + "\n\n"


def sentence(*rows, comments=()):
    return parse_conllx(conllx(*rows, comments=comments))[0]


def forms(*words):
    """Предложение только с формами, остальные колонки пустые."""
    return sentence(*(f"{i} {word} _ _ _ _ _ _ _ _" for i, word in enumerate(words, start=1)))
