"""Image processing pipeline.

Decode → dither with each selected algorithm → encode. Failures are kept
per image and per algorithm so one bad unit never stops the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from ditherer.core.algorithms import AlgorithmName, get_algorithm
from ditherer.core.dither import dither
from ditherer.core.errors import DecodeError, DitherError
from ditherer.core.reader import ChannelMode, load_image
from ditherer.core.writer import save_image
from ditherer.utils.paths import DEFAULT_OUTPUT_DIR, output_path_for


@dataclass(frozen=True)
class Settings:
    """Processing settings shared by every image in a run."""

    algorithms: tuple[AlgorithmName, ...] = tuple(AlgorithmName)
    mode: ChannelMode = ChannelMode.LUMINANCE
    output_dir: Path = DEFAULT_OUTPUT_DIR


@dataclass
class AlgorithmOutcome:
    """Result of running one algorithm over one image."""

    algorithm: AlgorithmName | str
    output: Path | None = None
    error: str | None = None
    exception: BaseException | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ImageReport:
    """Result of processing one input file."""

    input: Path
    width: int = 0
    height: int = 0
    outcomes: list[AlgorithmOutcome] = field(default_factory=list)
    error: str | None = None
    exception: BaseException | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None and all(o.ok for o in self.outcomes)


def process_image(
    path: str | Path,
    settings: Settings,
    on_progress: Callable[[AlgorithmOutcome], None] | None = None,
) -> ImageReport:
    """Dither one image with every algorithm in ``settings``.

    Args:
        path: input image file.
        settings: algorithms, channel mode and output directory.
        on_progress: optional callback invoked after each algorithm.

    Returns:
        An ImageReport. Decode failures are recorded on the report itself,
        dither/encode failures on the matching AlgorithmOutcome.
    """
    path = Path(path)
    report = ImageReport(input=path)

    try:
        buffer = load_image(path, settings.mode)
    except (FileNotFoundError, DecodeError) as e:
        report.error = str(e)
        report.exception = e
        return report

    report.height, report.width = buffer.shape[:2]

    for algorithm in settings.algorithms:
        outcome = AlgorithmOutcome(algorithm=algorithm)
        try:
            strategy = get_algorithm(algorithm)
            outcome.algorithm = strategy.name
            output_path = output_path_for(path, strategy.name, settings.output_dir)
            result = dither(buffer, strategy.name)
            save_image(result, output_path)
            outcome.output = output_path
        except DitherError as e:
            outcome.error = str(e)
            outcome.exception = e
        report.outcomes.append(outcome)
        if on_progress:
            on_progress(outcome)

    return report


def process_batch(
    paths: Iterable[str | Path],
    settings: Settings,
    on_progress: Callable[[AlgorithmOutcome], None] | None = None,
) -> list[ImageReport]:
    """Process several images; each one is attempted regardless of the others."""
    return [process_image(p, settings, on_progress) for p in paths]
