"""harness.py - CLI runner for the schematic solver.

Loads one or more puzzle inputs, prints both answers for each, and emits a
scan receipt per puzzle plus a run-level progress file.

Usage:
    python -m gearscan.harness day03/input
    python -m gearscan.harness day03/input other/input --strict --no-receipts

Flags:
    --receipts-dir / --no-receipts: where (or whether) to write receipts
    --progress-dir / --no-progress: where (or whether) to write progress JSON
    --puzzle-id: override the id derived from the input path
    --strict: fail on first error (default: continue and report)
"""
from __future__ import annotations
import argparse
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from . import config
from . import receipts
from . import schematic
from .grid import to_grid
from .mask import gear_ratios_vectorized, part_numbers_vectorized
from .puzzle_input import Input
from .utils import hash_utils


# ============================================================================
# Progress metrics
# ============================================================================
SCAN_METRICS = [
    "load_ok",
    "parts_crosscheck_ok",
    "gears_crosscheck_ok",
    "receipt_determinism_ok",
    "part1_sum",
    "part2_sum",
]


def init_progress(stage: str) -> Dict[str, Any]:
    """Initialize progress tracking dict for a stage.

    Returns:
        Progress dict with stage, puzzles_total, puzzles_ok, pre-initialized metrics
    """
    return {
        "stage": stage,
        "puzzles_total": 0,
        "puzzles_ok": 0,
        "metrics": {k: {"ok": 0, "total": 0, "sum": 0} for k in SCAN_METRICS},
    }


def acc_bool(progress: Dict[str, Any], key: str, ok: bool) -> None:
    """Accumulate boolean metric (unknown keys are ignored)."""
    if key not in progress["metrics"]:
        return
    m = progress["metrics"][key]
    m["total"] += 1
    m["ok"] += int(bool(ok))


def acc_sum(progress: Dict[str, Any], key: str, val: int) -> None:
    """Accumulate integer sum (unknown keys are ignored)."""
    if key not in progress["metrics"]:
        return
    progress["metrics"][key]["sum"] += int(val)


def _lift_int_digit_limit() -> None:
    """Allow answers of any length to be printed and written to JSON.

    Notes:
        - Interpreters without sys.set_int_max_str_digits have no limit
    """
    set_limit = getattr(sys, "set_int_max_str_digits", None)
    if set_limit is not None:
        set_limit(0)


def derive_puzzle_id(path: Path) -> str:
    """'day03/input' -> 'day03'; a bare 'input.txt' -> 'input'."""
    parent = path.parent.name
    return parent if parent not in ("", ".", "..") else path.stem


# ============================================================================
# Scan stage
# ============================================================================
def solve(input: Input) -> Dict[str, Any]:
    """Compute both answers plus the vectorized cross-check for one input.

    Returns:
        Receipt payload (without env/hash fields)
    """
    trimmed = input.trim_trailing_newlines()
    numbers = schematic.extract_numbers(trimmed)
    symbols = schematic.extract_symbols(trimmed)
    parts = schematic.part_numbers(trimmed)
    gears = schematic.gear_ratios(trimmed)

    grid = to_grid(trimmed)
    parts_vec = part_numbers_vectorized(grid)
    gears_vec = gear_ratios_vectorized(grid)

    return {
        "input": {
            "hash": hash_utils.hash_input(input),
        },
        "grid": {
            "shape": list(grid.shape),
            "hash": hash_utils.hash_grid(grid),
        },
        "tokens": {
            "hash": hash_utils.hash_tokens(numbers, symbols),
        },
        "counts": {
            "numbers": len(numbers),
            "symbols": len(symbols),
            "part_numbers": len(parts),
            "gears": len(gears),
        },
        "part1": sum(parts),
        "part2": sum(gears),
        "checks": {
            "parts_crosscheck_ok": parts == parts_vec,
            "gears_crosscheck_ok": gears == gears_vec,
        },
    }


def run_scan(
    puzzle_id: str,
    input: Input,
    receipts_dir: Optional[str] = config.RECEIPTS_DIR,
) -> Dict[str, Any]:
    """Solve one puzzle and (optionally) write its scan receipt.

    Notes:
        - The receipt 'hash' covers every field except itself and 'env',
          so reruns on the same input produce the same hash
    """
    receipts.check_puzzle_id(puzzle_id)
    _lift_int_digit_limit()

    payload = solve(input)
    payload["puzzle_id"] = puzzle_id
    payload["stage"] = config.SCAN_STAGE
    payload["hash"] = hash_utils.hash_payload(payload)
    payload["env"] = receipts.make_env_payload()

    if receipts_dir is not None:
        receipts.write_stage_receipt(puzzle_id, config.SCAN_STAGE, payload, out_dir=receipts_dir)
    return payload


def print_answers(payload: Dict[str, Any], out=None) -> None:
    out = out if out is not None else sys.stdout
    print("Part 1:", file=out)
    print(payload["part1"], file=out)
    print("Part 2:", file=out)
    print(payload["part2"], file=out)


def run_stage_scan(
    inputs: Sequence[Path],
    strict: bool = False,
    receipts_dir: Optional[str] = config.RECEIPTS_DIR,
    progress_dir: Optional[str] = config.PROGRESS_DIR,
    puzzle_id: Optional[str] = None,
) -> int:
    """Run the scan stage over every input path.

    Returns:
        Number of failed puzzles

    Raises:
        Whatever the first failure raised, if strict
    """
    progress = init_progress(config.SCAN_STAGE)
    fail_count = 0

    print(f"[scan] Solving {len(inputs)} input(s)", file=sys.stderr)

    for path in inputs:
        pid = puzzle_id or derive_puzzle_id(path)
        progress["puzzles_total"] += 1
        try:
            input = Input.load(path)
        except OSError as e:
            print(f"[scan] Failed to load {path}: {e}", file=sys.stderr)
            acc_bool(progress, "load_ok", False)
            if strict:
                raise
            fail_count += 1
            continue
        acc_bool(progress, "load_ok", True)

        try:
            payload = run_scan(pid, input, receipts_dir=receipts_dir)
            rerun_hash = run_scan(pid, input, receipts_dir=None)["hash"]

            checks = payload["checks"]
            acc_bool(progress, "parts_crosscheck_ok", checks["parts_crosscheck_ok"])
            acc_bool(progress, "gears_crosscheck_ok", checks["gears_crosscheck_ok"])
            acc_bool(progress, "receipt_determinism_ok", rerun_hash == payload["hash"])
            acc_sum(progress, "part1_sum", payload["part1"])
            acc_sum(progress, "part2_sum", payload["part2"])

            if not all(checks.values()):
                failed = sorted(k for k, v in checks.items() if not v)
                raise RuntimeError(f"Cross-check failed for {pid}: {failed}")

            if len(inputs) > 1:
                print(f"== {pid} ==")
            print_answers(payload)
            progress["puzzles_ok"] += 1

        except Exception as e:
            print(f"[scan] Puzzle {pid} failed: {e}", file=sys.stderr)
            if strict:
                raise
            traceback.print_exc(file=sys.stderr)
            fail_count += 1

    print(
        f"[scan] Complete: {progress['puzzles_ok']}/{progress['puzzles_total']} solved, "
        f"{fail_count} failures",
        file=sys.stderr,
    )

    if progress_dir is not None:
        progress_path = receipts.write_run_progress(progress, out_dir=progress_dir)
        print(f"[scan] Progress written to {progress_path}", file=sys.stderr)

    return fail_count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gearscan",
        description="Engine-schematic solver harness (part numbers and gear ratios)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve one puzzle, writing receipts/day03/scan.json
  python -m gearscan.harness day03/input

  # Solve several puzzles without touching the filesystem
  python -m gearscan.harness a/input b/input --no-receipts --no-progress
        """,
    )
    parser.add_argument(
        "inputs",
        type=Path,
        nargs="+",
        help="Puzzle input file(s)",
    )
    parser.add_argument(
        "--puzzle-id",
        type=str,
        default=None,
        help="Puzzle id for receipts (single input only; default: input's directory name)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on first error (default: continue and report)",
    )
    parser.add_argument(
        "--receipts-dir",
        type=str,
        default=config.RECEIPTS_DIR,
        help=f"Receipt output directory (default: {config.RECEIPTS_DIR}/)",
    )
    parser.add_argument(
        "--no-receipts",
        dest="receipts",
        action="store_false",
        help="Disable receipt writing",
    )
    parser.add_argument(
        "--progress-dir",
        type=str,
        default=config.PROGRESS_DIR,
        help=f"Progress output directory (default: {config.PROGRESS_DIR}/)",
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Disable progress JSON writing",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for harness."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.puzzle_id is not None and len(args.inputs) > 1:
        parser.error("--puzzle-id requires exactly one input")
    if args.puzzle_id is not None:
        try:
            receipts.check_puzzle_id(args.puzzle_id)
        except ValueError as e:
            parser.error(str(e))

    fail_count = run_stage_scan(
        args.inputs,
        strict=args.strict,
        receipts_dir=args.receipts_dir if args.receipts else None,
        progress_dir=args.progress_dir if args.progress else None,
        puzzle_id=args.puzzle_id,
    )

    if fail_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
