# conllx_utils/commands/compare.py
"""
conllx-compare: построчный дифф двух CoNLL-X файлов по выбранным слоям.
"""
import argparse
import logging
import sys

from conllx_utils.commands.common import LAYER_CHOICES, add_common_arguments, progress, run_command, use_color
from conllx_utils.config import Settings
from conllx_utils.evaluation.compare import CorpusComparison, ReportPrinter
from conllx_utils.ingestion.reader import CorpusReader
from conllx_utils.layers import resolve_layers

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conllx-compare",
        description="Show sentences whose layers differ between two CoNLL-X files")
    parser.add_argument("-l", "--layer", default=None, metavar="LAYER[,LAYER]",
                        help=f"layer(s) to compare ({LAYER_CHOICES}, default: headrel)")
    parser.add_argument("-s", "--show", default=None, metavar="LAYER[,LAYER]",
                        help=f"extra layer(s) to show from the first file ({LAYER_CHOICES}, default: form)")
    parser.add_argument("--color", choices=["auto", "always", "never"], default=None,
                        help="highlight differing values (default: auto)")
    parser.add_argument("file1", help="first CoNLL-X file")
    parser.add_argument("file2", help="second CoNLL-X file")
    add_common_arguments(parser)
    return parser


def compare(args: argparse.Namespace, settings: Settings):
    # Слои проверяются до открытия файлов
    diff_layers = resolve_layers(args.layer if args.layer is not None else settings.diff_layers)
    show_layers = resolve_layers(args.show if args.show is not None else settings.show_layers)

    out = sys.stdout
    printer = ReportPrinter(out, color=use_color(args.color or settings.color, out))
    comparison = CorpusComparison(diff_layers, show_layers)

    with CorpusReader(args.file1, settings.feature_separator) as reader1, \
            CorpusReader(args.file2, settings.feature_separator) as reader2:
        sentences1 = progress(reader1, args.progress, "Comparing")
        for block in comparison.run(sentences1, reader2):
            printer.print_block(block)

    logger.info(f"Compared {comparison.pairs} sentence pairs, {comparison.differing} differ")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return run_command(compare, args)


if __name__ == "__main__":
    sys.exit(main())
