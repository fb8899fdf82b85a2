# conllx_utils/commands/grep.py
"""
conllx-grep: отбор (или пометка) предложений по регулярному выражению на слое.
"""
import argparse
import logging
import sys

from conllx_utils.commands.common import LAYER_CHOICES, add_common_arguments, progress, run_command
from conllx_utils.config import Settings
from conllx_utils.ingestion.reader import CorpusReader
from conllx_utils.ingestion.writer import SentenceWriter
from conllx_utils.layers import resolve
from conllx_utils.search.grep import SentenceGrep, compile_pattern

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conllx-grep",
        description="Select CoNLL-X sentences with a token whose layer matches EXPR")
    parser.add_argument("-l", "--layer", default=None, metavar="LAYER",
                        help=f"layer: {LAYER_CHOICES} (default: form)")
    parser.add_argument("-m", "--mark", default=None, metavar="FEATURE",
                        help="mark matching tokens using the given feature and keep all sentences")
    parser.add_argument("expr", help="regular expression")
    parser.add_argument("input", nargs="?", default=None, help="input file (default: stdin)")
    parser.add_argument("output", nargs="?", default=None, help="output file (default: stdout)")
    add_common_arguments(parser)
    return parser


def grep(args: argparse.Namespace, settings: Settings):
    layer = resolve(args.layer if args.layer is not None else settings.grep_layer)
    pattern = compile_pattern(args.expr)
    sentence_grep = SentenceGrep(layer, pattern, mark=args.mark)

    with CorpusReader(args.input, settings.feature_separator) as reader, \
            SentenceWriter(args.output, settings.feature_separator) as writer:
        for sentence in sentence_grep.run(progress(reader, args.progress, "Searching")):
            writer.write(sentence)

    logger.info(f"{sentence_grep.matched_sentences} of {sentence_grep.sentences} sentences matched "
                f"'{args.expr}' on layer '{layer.name}'")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return run_command(grep, args)


if __name__ == "__main__":
    sys.exit(main())
