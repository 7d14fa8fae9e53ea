"""Output file naming."""

from __future__ import annotations

from pathlib import Path

from ditherer.core.algorithms import AlgorithmName

DEFAULT_OUTPUT_DIR = Path("out")
FALLBACK_SUFFIX = ".png"


def output_path_for(
    input_path: str | Path,
    algorithm: AlgorithmName | str,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
) -> Path:
    """Build ``<output_dir>/<stem>.<algorithm><suffix>`` for an input file.

    Inputs without an extension are written as PNG.
    """
    input_path = Path(input_path)
    tag = AlgorithmName(algorithm).value
    suffix = input_path.suffix or FALLBACK_SUFFIX
    return Path(output_dir) / f"{input_path.stem}.{tag}{suffix}"
