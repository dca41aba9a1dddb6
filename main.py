"""RPG Maker MV/MZ text extraction and reinjection.

Usage:
    python main.py read  -i <game dir> [-o <work dir>] [-f | -a]
    python main.py write -i <game dir> [-o <work dir>] [-s {0,1,2}]
"""

import argparse
import logging
import sys
import time

from rpgm_txt.config import CORPORA, SHUFFLE_LEVELS, EngineConfig, ProcessingMode
from rpgm_txt.engine import extract, inject
from rpgm_txt.errors import EngineError


def _corpora(value: str) -> frozenset:
    names = frozenset(part.strip() for part in value.split(",") if part.strip())
    unknown = names.difference(CORPORA)
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown corpus: {', '.join(sorted(unknown))} "
            f"(choose from {', '.join(CORPORA)})")
    return names


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-i", "--input-dir", default=".",
                        help="Game folder holding original/ or data/")
    common.add_argument("-o", "--output-dir", default=None,
                        help="Folder for translation/ and output/ "
                             "(defaults to the input folder)")
    common.add_argument("-r", "--romanize", action="store_true",
                        help="Replace CJK punctuation with ASCII equivalents")
    common.add_argument("--disable-processing", type=_corpora,
                        default=frozenset(), metavar="CORPORA",
                        help=f"Comma-separated corpora to skip: {','.join(CORPORA)}")
    common.add_argument("--disable-custom-parsing", action="store_true",
                        help="Ignore per-game rules and use the generic ones")
    common.add_argument("--log", action="store_true",
                        help="Log every file read or written")

    parser = argparse.ArgumentParser(
        prog="rpgm-txt",
        description="Extract RPG Maker MV/MZ text to .txt pools and write "
                    "translations back.")
    sub = parser.add_subparsers(dest="command", required=True)

    read = sub.add_parser("read", parents=[common],
                          help="Extract text into translation/")
    modes = read.add_mutually_exclusive_group()
    modes.add_argument("-f", "--force", action="store_true",
                       help="Rewrite every pool, including filled _trans files")
    modes.add_argument("-a", "--append", action="store_true",
                       help="Keep existing pools and add only new lines")

    write = sub.add_parser("write", parents=[common],
                           help="Write translated files into output/")
    write.add_argument("-s", "--shuffle-level", type=int,
                       choices=SHUFFLE_LEVELS, default=0,
                       help="1 shuffles translations between lines, "
                            "2 also shuffles words (for testing)")
    return parser


def _processing_mode(args) -> ProcessingMode:
    if getattr(args, "force", False):
        return ProcessingMode.FORCE
    if getattr(args, "append", False):
        return ProcessingMode.APPEND
    return ProcessingMode.DEFAULT


def config_from_args(args) -> EngineConfig:
    return EngineConfig(
        romanize=args.romanize,
        shuffle_level=getattr(args, "shuffle_level", 0),
        mode=_processing_mode(args),
        custom_parsing=not args.disable_custom_parsing,
        disabled=args.disable_processing,
        log_files=args.log,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.log else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = config_from_args(args)

    start = time.perf_counter()
    try:
        if args.command == "read":
            extract(args.input_dir, args.output_dir, config)
        else:
            inject(args.input_dir, args.output_dir, config)
    except EngineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Elapsed: {time.perf_counter() - start:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
