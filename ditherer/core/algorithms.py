"""Error-diffusion kernels and the algorithm registry.

Each algorithm is a plain strategy object carrying its kernel table and its
quantization function. Tap weights are stored as fractions of the error:

Floyd-Steinberg (sixteenths)::

           | PXL |  7  |
       |  3  |  5  |  1  |

Atkinson (eighths, 2/8 of the error is discarded)::

           | PXL |  1  |  1  |
       |  1  |  1  |  1  |
           |  1  |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np
from numba import njit

from ditherer.core.errors import UnsupportedAlgorithmError


class AlgorithmName(str, Enum):
    FLOYD_STEINBERG = "floyd"
    ATKINSON = "atkinson"


@dataclass(frozen=True)
class Tap:
    """One kernel entry: offset from the current pixel and its error share."""

    dx: int
    dy: int
    weight: float


@dataclass(frozen=True)
class Kernel:
    name: str
    taps: tuple[Tap, ...]

    @property
    def total_weight(self) -> float:
        """Fraction of each pixel's error the kernel hands on to neighbors."""
        return sum(tap.weight for tap in self.taps)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Split the taps into (dx, dy, weight) arrays for the compiled loop."""
        dxs = np.array([tap.dx for tap in self.taps], dtype=np.int64)
        dys = np.array([tap.dy for tap in self.taps], dtype=np.int64)
        weights = np.array([tap.weight for tap in self.taps], dtype=np.float64)
        return dxs, dys, weights


@njit
def threshold_quantize(value: float, max_value: float) -> float:
    """Map a sample to 0 or max_value around the midpoint.

    Values strictly above max_value / 2 become max_value, everything else 0.
    Compiled so the diffusion loop can call it without leaving nopython mode.
    """
    if value > max_value / 2.0:
        return max_value
    return 0.0


@dataclass(frozen=True)
class DitherAlgorithm:
    name: AlgorithmName
    kernel: Kernel
    quantize: Callable[[float, float], float] = threshold_quantize


FLOYD_STEINBERG_KERNEL = Kernel(
    name="floyd-steinberg",
    taps=(
        Tap(1, 0, 7 / 16),
        Tap(-1, 1, 3 / 16),
        Tap(0, 1, 5 / 16),
        Tap(1, 1, 1 / 16),
    ),
)

ATKINSON_KERNEL = Kernel(
    name="atkinson",
    taps=(
        Tap(1, 0, 1 / 8),
        Tap(2, 0, 1 / 8),
        Tap(-1, 1, 1 / 8),
        Tap(0, 1, 1 / 8),
        Tap(1, 1, 1 / 8),
        Tap(0, 2, 1 / 8),
    ),
)


ALGORITHMS: dict[AlgorithmName, DitherAlgorithm] = {
    AlgorithmName.FLOYD_STEINBERG: DitherAlgorithm(
        name=AlgorithmName.FLOYD_STEINBERG,
        kernel=FLOYD_STEINBERG_KERNEL,
    ),
    AlgorithmName.ATKINSON: DitherAlgorithm(
        name=AlgorithmName.ATKINSON,
        kernel=ATKINSON_KERNEL,
    ),
}


def get_algorithm(name: AlgorithmName | str) -> DitherAlgorithm:
    """Look up a registered algorithm by enum member or string value."""
    try:
        key = AlgorithmName(name)
    except ValueError:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {name!r}") from None
    if key not in ALGORITHMS:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {key.value!r}")
    return ALGORITHMS[key]
