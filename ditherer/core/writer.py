"""Save dithered pixel buffers as image files.

The output format is picked by Pillow from the file extension.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from ditherer.core.errors import EncodeError


def to_image(buffer: np.ndarray) -> Image.Image:
    """Convert an (H, W) or (H, W, 3) buffer in [0, 255] to a PIL image."""
    arr = np.asarray(buffer)
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[:, :, 0]
    if not (arr.ndim == 2 or (arr.ndim == 3 and arr.shape[2] == 3)):
        raise EncodeError(f"Cannot encode buffer of shape {arr.shape}")

    arr = np.clip(np.rint(arr.astype(np.float64)), 0, 255).astype(np.uint8)
    return Image.fromarray(arr)


def save_image(buffer: np.ndarray, path: str | Path) -> None:
    """Write a pixel buffer to ``path``, creating the parent directory.

    Raises:
        EncodeError: the buffer cannot be represented, the extension is not
            a known image format, or the file cannot be written.
    """
    path = Path(path)
    img = to_image(buffer)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        img.save(str(path))
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to save {path}: {e}") from e
