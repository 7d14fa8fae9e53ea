"""Decode image files into pixel buffers.

Two channel layouts are supported: a single relative-luminance plane, or
the three RGB planes dithered independently.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ditherer.core.errors import DecodeError

# Rec. 709 relative luminance weights for R, G, B
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


class ChannelMode(str, Enum):
    LUMINANCE = "luminance"
    RGB = "rgb"


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Collapse an (H, W, 3) RGB array into an (H, W) luminance plane."""
    return rgb[..., :3].astype(np.float64) @ LUMINANCE_WEIGHTS


def to_buffer(img: Image.Image, mode: ChannelMode = ChannelMode.LUMINANCE) -> np.ndarray:
    """Convert a PIL image into a pixel buffer in [0, 255].

    Alpha is dropped rather than composited. Luminance mode yields a float64
    (H, W) array; RGB mode yields a uint8 (H, W, 3) array.
    """
    rgb = np.array(img.convert("RGB"), dtype=np.uint8)
    if ChannelMode(mode) == ChannelMode.RGB:
        return rgb
    return luminance(rgb)


def load_image(path: str | Path, mode: ChannelMode = ChannelMode.LUMINANCE) -> np.ndarray:
    """Read an image file into a pixel buffer.

    Raises:
        FileNotFoundError: the path does not exist.
        DecodeError: the file exists but is not a readable image.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.is_dir():
        raise DecodeError(f"Not an image file: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            return to_buffer(img, mode)
    except UnidentifiedImageError as e:
        raise DecodeError(f"Cannot decode image {path}: {e}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large {path}: {e}") from e
    except (OSError, ValueError) as e:
        raise DecodeError(f"Failed to read {path}: {e}") from e
