#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import pathlib
from dataclasses import asdict
from typing import Any, Iterable

from ShelfTSP import AlgorithmType, ShelfTSP


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute a cyclic item distribution for one or more matrices.")
    parser.add_argument(
        "matrix_file",
        type=pathlib.Path,
        help=(
            "JSON file holding a matrix (list of lists), or an object with a 'matrix' or "
            "'matrices' key and an optional 'affinity' flag."
        ),
    )
    parser.add_argument(
        "--algorithm",
        choices=[tag.value for tag in AlgorithmType],
        default=AlgorithmType.GREEDY.value,
        help="Algorithm used to build the distribution.",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        help="Algorithm parameter token, consumed in the order the algorithm lists them (repeatable).",
    )
    parser.add_argument(
        "--affinity",
        action="store_true",
        help="Treat the matrix values as affinities (larger means closer) and invert them first.",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Optional wall clock budget in seconds for a single matrix.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Only print the usable algorithms and their parameters.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for diagnostics (DEBUG, INFO, WARNING, ...).",
    )
    return parser.parse_args(raw_args)


def load_problem(path: pathlib.Path) -> tuple[list[Any], bool]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        return [payload], False
    affinity = bool(payload.get("affinity", False))
    if "matrices" in payload:
        return list(payload["matrices"]), affinity
    if "matrix" in payload:
        return [payload["matrix"]], affinity
    raise SystemExit(f"No 'matrix' or 'matrices' key in {path}")


def describe_algorithms(engine: ShelfTSP, matrices: list[Any], affinity: bool) -> dict:
    usable = engine.common_types(matrices, affinity=affinity)
    return {
        "usable": [
            {
                "algorithm": tag.value,
                "parameters": [asdict(descriptor) for descriptor in engine.parameters_for(tag)],
            }
            for tag in usable
        ]
    }


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.matrix_file.exists():
        raise SystemExit(f"Matrix file not found: {args.matrix_file}")

    matrices, affinity = load_problem(args.matrix_file)
    affinity = affinity or args.affinity
    engine = ShelfTSP(affinity=affinity)

    if args.list:
        print(json.dumps(describe_algorithms(engine, matrices, affinity), indent=2))
        return 0

    if len(matrices) == 1:
        result = engine.solve(matrices[0], args.algorithm, args.param, time_limit=args.time_limit)
        print(json.dumps(asdict(result), indent=2))
        return 0 if result.status != "unavailable" else 1

    try:
        results = engine.solve_many(matrices, args.algorithm, args.param)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    print(json.dumps([asdict(result) for result in results], indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
