# conllx_utils/commands/merge.py
"""
conllx-merge: склейка нескольких CoNLL-X файлов в один поток.
"""
import argparse
import sys

from conllx_utils.commands.common import add_common_arguments, progress, run_command
from conllx_utils.config import Settings
from conllx_utils.ingestion.merge import merge_corpora
from conllx_utils.ingestion.writer import SentenceWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conllx-merge",
        description="Concatenate CoNLL-X files")
    parser.add_argument("-w", "--write", default=None, metavar="NAME",
                        help="write to file (default: stdout)")
    parser.add_argument("files", nargs="+", metavar="FILE", help="input files, in order")
    add_common_arguments(parser)
    return parser


def merge(args: argparse.Namespace, settings: Settings):
    with SentenceWriter(args.write, settings.feature_separator) as writer:
        sentences = merge_corpora(args.files, settings.feature_separator)
        for sentence in progress(sentences, args.progress, "Merging"):
            writer.write(sentence)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return run_command(merge, args)


if __name__ == "__main__":
    sys.exit(main())
