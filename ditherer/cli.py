"""Command-line interface for ditherer.

Every input image is dithered with every selected algorithm and written to
``<output-dir>/<name>.<algorithm>.<ext>``. Human-readable progress goes to
stderr; ``--json`` prints a structured summary to stdout instead.
"""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

from ditherer.core.algorithms import AlgorithmName
from ditherer.core.reader import ChannelMode
from ditherer.utils.paths import DEFAULT_OUTPUT_DIR

if TYPE_CHECKING:
    from ditherer.core.processor import AlgorithmOutcome, ImageReport, Settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ditherer",
        description="Dither images to black and white with error diffusion.",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Input image file path(s).",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help=f"Directory for dithered images (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "-a", "--algorithm",
        action="append",
        choices=[a.value for a in AlgorithmName],
        help="Algorithm to run; repeat for several (default: all).",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ChannelMode],
        default="luminance",
        help="Dither a single luminance plane or each RGB channel (default: luminance).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    from ditherer.core.processor import Settings

    if args.algorithm:
        # Keep first-seen order, drop repeats
        algorithms = tuple(dict.fromkeys(AlgorithmName(a) for a in args.algorithm))
    else:
        algorithms = tuple(AlgorithmName)

    return Settings(
        algorithms=algorithms,
        mode=ChannelMode(args.mode),
        output_dir=Path(args.output_dir),
    )


def _print_traceback(exc: BaseException | None) -> None:
    if exc is not None:
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def _algorithm_label(algorithm: AlgorithmName | str) -> str:
    if isinstance(algorithm, AlgorithmName):
        return algorithm.value
    return str(algorithm)


def _report_to_dict(report: ImageReport) -> dict:
    return {
        "input": str(report.input),
        "status": "success" if report.ok else "error",
        "error": report.error,
        "width": report.width,
        "height": report.height,
        "outputs": [
            {
                "algorithm": _algorithm_label(o.algorithm),
                "output": str(o.output) if o.output else None,
                "error": o.error,
            }
            for o in report.outcomes
        ],
    }


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, process every input and return the exit code."""
    from ditherer.core.processor import process_image

    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = _settings_from_args(args)
    is_json = args.json

    def on_progress(outcome: AlgorithmOutcome) -> None:
        label = _algorithm_label(outcome.algorithm)
        if outcome.ok:
            if not is_json:
                print(f"  {label}: saved to {outcome.output}", file=sys.stderr)
            return
        if not is_json:
            print(f"  {label}: error: {outcome.error}", file=sys.stderr)
        if args.debug:
            _print_traceback(outcome.exception)

    reports: list[ImageReport] = []
    for raw_input in args.inputs:
        input_path = Path(raw_input)
        if not is_json:
            print(f"Dithering {input_path}...", file=sys.stderr)

        report = process_image(input_path, settings, on_progress=on_progress)
        reports.append(report)

        if report.error:
            if not is_json:
                print(f"Error: {report.error}", file=sys.stderr)
            if args.debug:
                _print_traceback(report.exception)

    all_ok = all(r.ok for r in reports)

    if is_json:
        result = {
            "status": "success" if all_ok else "error",
            "settings": {
                "algorithms": [a.value for a in settings.algorithms],
                "mode": settings.mode.value,
                "output_dir": str(settings.output_dir),
            },
            "images": [_report_to_dict(r) for r in reports],
        }
        print(json.dumps(result, indent=2))
    elif not all_ok:
        failed = sum(1 for r in reports if not r.ok)
        print(f"{failed} of {len(reports)} image(s) had errors", file=sys.stderr)

    return 0 if all_ok else 1


def main() -> None:
    """Main entry point."""
    sys.exit(run())
