#!/usr/bin/env python3
"""Build a list from the command line, transform it and print the result.

Transforms run in the order their flags appear::

    python -m scripts.list_demo a b c d e --interleave --move-to-back 1
"""

import argparse
import random

from seqlist.errors import OutOfRangeError
from seqlist.observability import configure_logging
from seqlist.sequential_list import SequentialList


def _move_to_back(value: str) -> tuple:
    return ("move_to_back", int(value))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Apply list transforms to the given entries")
    parser.add_argument("entries", nargs="*", help="Entries, in order")
    parser.add_argument("--int", dest="as_int", action="store_true", help="Parse entries as integers")
    parser.add_argument("--seed", type=int, help="Seed for --permute and --shuffle")
    parser.add_argument("--log-level", help="Override SEQLIST_LOG_LEVEL")

    steps = dict(dest="steps", action="append_const")
    parser.add_argument("--reverse", const=("reverse", None), help="Reverse the list", **steps)
    parser.add_argument("--interleave", const=("interleave", None), help="Riffle the two halves", **steps)
    parser.add_argument(
        "--permute", const=("random_permutation", None), help="Full-range random permutation", **steps
    )
    parser.add_argument("--shuffle", const=("shuffle", None), help="Uniform shuffle", **steps)
    parser.add_argument(
        "--move-to-back",
        dest="steps",
        action="append",
        type=_move_to_back,
        metavar="POSITION",
        help="Move the entry at POSITION to the end",
    )
    return parser


def run(args: argparse.Namespace) -> SequentialList:
    entries = [int(e) for e in args.entries] if args.as_int else list(args.entries)
    items = SequentialList(entries)
    rng = random.Random(args.seed)
    for name, argument in args.steps or []:
        if name == "move_to_back":
            items.move_to_back(argument)
        elif name in ("random_permutation", "shuffle"):
            getattr(items, name)(rng)
        else:
            getattr(items, name)()
    return items


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)
    try:
        items = run(args)
    except (OutOfRangeError, ValueError) as exc:
        parser.error(str(exc))
    print(items)
    if not items.is_empty():
        print(items.display())


if __name__ == "__main__":
    main()
