"""Image normalization for the :mod:`imagebank` pipeline."""

from __future__ import annotations

from .normalizer import (
    NormalizationReport,
    normalize_folder,
    normalize_image,
    normalize_images,
    resize_image,
)
from .validators import read_image

__all__ = [
    "NormalizationReport",
    "normalize_folder",
    "normalize_image",
    "normalize_images",
    "resize_image",
    "read_image",
]
