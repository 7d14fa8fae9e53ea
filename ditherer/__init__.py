"""Error-diffusion dithering for raster images."""

__version__ = "0.1.0"
