"""Error diffusion dithering engine.

A single raster-order pass (row 0 left to right, then row 1, ...) quantizes
every pixel to 0 or MAX and pushes the quantization error onto the
neighbors named by the algorithm's kernel. Error aimed outside the buffer is
dropped rather than redistributed, so edges show slightly different texture
than the interior.
"""

from __future__ import annotations

import numpy as np
from numba import njit

from ditherer.core.algorithms import AlgorithmName, DitherAlgorithm, get_algorithm
from ditherer.core.errors import InvalidBufferError

DEFAULT_MAX_VALUE = 255


def _validate(buffer: np.ndarray) -> None:
    if buffer.ndim not in (2, 3):
        raise InvalidBufferError(
            f"Expected a 2D or 3D pixel buffer, got shape {buffer.shape}"
        )
    h, w = buffer.shape[:2]
    if h == 0 or w == 0:
        raise InvalidBufferError(f"Pixel buffer has no pixels: {w}x{h}")
    if buffer.ndim == 3 and buffer.shape[2] == 0:
        raise InvalidBufferError("Pixel buffer has no channels")


@njit
def _diffuse_plane(plane, dxs, dys, weights, quantize, max_value):
    """Raster pass over one channel; returns the error that reached no pixel."""
    h, w = plane.shape
    undelivered = 0.0

    for y in range(h):
        for x in range(w):
            old = plane[y, x]
            new = quantize(old, max_value)
            plane[y, x] = new
            err = old - new

            delivered = 0.0
            for k in range(dxs.shape[0]):
                nx = x + dxs[k]
                ny = y + dys[k]
                if 0 <= nx < w and ny < h:
                    share = err * weights[k]
                    plane[ny, nx] += share
                    delivered += share
            undelivered += err - delivered

    return undelivered


def diffuse(
    work: np.ndarray,
    algorithm: DitherAlgorithm,
    max_value: float = DEFAULT_MAX_VALUE,
) -> np.ndarray:
    """Dither a float64 (H, W, C) working buffer in place.

    Each channel is dithered on its own by a compiled raster loop; no error
    ever crosses between channels.

    Returns:
        Per-channel total of error that never reached a pixel: shares that
        fell outside the buffer plus whatever the kernel itself discards.
    """
    dxs, dys, weights = algorithm.kernel.as_arrays()
    channels = work.shape[2]
    undelivered = np.zeros(channels, dtype=np.float64)

    for c in range(channels):
        undelivered[c] = _diffuse_plane(
            work[:, :, c], dxs, dys, weights, algorithm.quantize, float(max_value)
        )

    return undelivered


def dither(
    buffer: np.ndarray,
    algorithm: AlgorithmName | str = AlgorithmName.FLOYD_STEINBERG,
    max_value: float = DEFAULT_MAX_VALUE,
) -> np.ndarray:
    """Dither a pixel buffer to two levels per channel.

    Args:
        buffer: (H, W) or (H, W, C) array of samples in [0, max_value].
            It is never modified.
        algorithm: algorithm name, e.g. AlgorithmName.ATKINSON or "atkinson".
        max_value: the upper quantization level.

    Returns:
        New array with the same shape and dtype as ``buffer`` whose samples
        are all exactly 0 or max_value.

    Raises:
        InvalidBufferError: zero-area or wrongly shaped buffer.
        UnsupportedAlgorithmError: unknown algorithm.
        ValueError: max_value is not positive or exceeds an integer dtype.
    """
    buffer = np.asarray(buffer)
    _validate(buffer)
    strategy = get_algorithm(algorithm)
    if max_value <= 0:
        raise ValueError(f"max_value must be positive, got {max_value}")
    if np.issubdtype(buffer.dtype, np.integer) and max_value > np.iinfo(buffer.dtype).max:
        raise ValueError(
            f"max_value {max_value} does not fit in buffer dtype {buffer.dtype}"
        )

    # Accumulate in float64 so diffused error is never clipped mid-pass
    work = buffer.astype(np.float64)
    if work.ndim == 2:
        work = work[:, :, np.newaxis]

    diffuse(work, strategy, max_value)

    return work.reshape(buffer.shape).astype(buffer.dtype)
