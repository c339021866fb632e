"""
Command line runner for table-driven automata.

Run:
    tablefsa show table1.txt
    tablefsa run table1.txt abbc abba
    tablefsa batch table1.txt inputs.txt --output verdicts.txt
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

import numpy as np

from tablefsa.core.codec import render_table
from tablefsa.evaluation import (
    acceptance_accuracy,
    acceptance_confusion_matrix,
    classify_strings,
    format_verdicts,
    parse_verdicts,
)
from tablefsa.loader import ENCODING, LoadResult, load_automaton

logger = logging.getLogger(__name__)


def default_output_path(inputs_path: str) -> str:
    base, extension = os.path.splitext(inputs_path)
    return f"{base}-output{extension}"


def _load_or_report(table_path: str) -> Optional[LoadResult]:
    result = load_automaton(table_path)
    if not result.ok:
        print(f"error: {result.error}", file=sys.stderr)
        return None
    return result


def _cmd_show(args: argparse.Namespace) -> int:
    result = _load_or_report(args.table)
    if result is None:
        return 1
    sys.stdout.write(render_table(result.automaton))
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    result = _load_or_report(args.table)
    if result is None:
        return 1
    verdicts = classify_strings(result.automaton, args.inputs)
    sys.stdout.write(format_verdicts(verdicts))
    return 0


def _cmd_batch(args: argparse.Namespace) -> int:
    result = _load_or_report(args.table)
    if result is None:
        return 1

    try:
        with open(args.inputs, "r", encoding=ENCODING) as f:
            strings = [line.rstrip("\r\n") for line in f]
    except OSError as exc:
        print(f"error: cannot read {args.inputs}: {exc}", file=sys.stderr)
        return 1

    expected = None
    if args.expected:
        try:
            with open(args.expected, "r", encoding=ENCODING) as f:
                expected = parse_verdicts(f)
        except (OSError, ValueError) as exc:
            print(f"error: cannot read expected verdicts {args.expected}: {exc}", file=sys.stderr)
            return 1
        if len(expected) != len(strings):
            print(
                f"error: {args.expected} has {len(expected)} verdicts "
                f"for {len(strings)} inputs",
                file=sys.stderr,
            )
            return 1

    output_path = args.output or default_output_path(args.inputs)
    verdicts = classify_strings(result.automaton, strings)
    try:
        with open(output_path, "w", encoding=ENCODING) as f:
            f.write(format_verdicts(verdicts))
    except OSError as exc:
        print(f"error: cannot write {output_path}: {exc}", file=sys.stderr)
        return 1

    logger.info("wrote %d verdicts to %s", len(strings), output_path)
    print(f"Wrote {len(strings)} verdicts to {output_path}")

    if expected is not None and strings:
        accuracy = acceptance_accuracy(result.automaton, strings, expected)
        matrix = acceptance_confusion_matrix(verdicts, expected)
        print(f"Accuracy: {accuracy:.4f} ({int(np.trace(matrix))}/{len(strings)})")
        print(f"Expected R: predicted R={matrix[0, 0]} A={matrix[0, 1]}")
        print(f"Expected A: predicted R={matrix[1, 0]} A={matrix[1, 1]}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tablefsa",
        description="Run table-driven finite-state automata",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="print a table in canonical form")
    show.add_argument("table", help="path to the table file")
    show.set_defaults(func=_cmd_show)

    run = subparsers.add_parser("run", help="print A/R for each input string")
    run.add_argument("table", help="path to the table file")
    run.add_argument("inputs", nargs="*", help="input strings")
    run.set_defaults(func=_cmd_run)

    batch = subparsers.add_parser("batch", help="classify one input string per line of a file")
    batch.add_argument("table", help="path to the table file")
    batch.add_argument("inputs", help="file with one input string per line")
    batch.add_argument("-o", "--output", help="verdict file (default: <inputs>-output<ext>)")
    batch.add_argument(
        "-e",
        "--expected",
        help="file of expected A/R verdicts, one per input; prints accuracy and confusion counts",
    )
    batch.set_defaults(func=_cmd_batch)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
