# conllx_utils/commands/common.py
"""
Общая обвязка команд: логирование, настройки, прогресс-бар и обработка
фатальных ошибок.
"""
import argparse
import logging
import os
import sys
from typing import Callable, Iterable, TextIO

from tqdm import tqdm

from conllx_utils.config import LOG_FORMAT, Settings, load_settings
from conllx_utils.errors import ConllxUtilsError
from conllx_utils.layers import layer_names

logger = logging.getLogger(__name__)

LAYER_CHOICES = ", ".join(layer_names())


def add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--config", default=None, metavar="PATH",
                        help="YAML settings file")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="log warnings and errors only")
    parser.add_argument("--progress", action="store_true",
                        help="show a progress bar on stderr")


def setup_logging(settings: Settings, quiet: bool = False):
    logging.getLogger().setLevel(logging.WARNING if quiet else settings.log_level)


def use_color(when: str, stream: TextIO) -> bool:
    if when == "always":
        return True
    if when == "never":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def progress(sentences: Iterable, enabled: bool, desc: str) -> Iterable:
    return tqdm(sentences, desc=desc, unit=" sent", disable=not enabled)


def run_command(command: Callable[[argparse.Namespace, Settings], None],
                args: argparse.Namespace) -> int:
    """
    Запускает команду и превращает фатальные ошибки в код выхода 1.
    Настройки грузятся до логирования, поэтому их ошибки тоже логируются здесь.
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    try:
        settings = load_settings(args.config)
        setup_logging(settings, args.quiet)
        command(args, settings)
    except ConllxUtilsError as e:
        logger.error(str(e))
        return 1
    except BrokenPipeError:
        # Читатель закрыл канал (например, "| head"); остаток вывода - в /dev/null
        logger.debug("Output pipe closed by reader")
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except OSError as e:
        logger.error(f"Cannot access {e.filename or 'stream'}: {e.strerror or e}")
        return 1
    return 0
