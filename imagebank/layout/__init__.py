"""Chunking and page layout for the :mod:`imagebank` pipeline."""

from __future__ import annotations

from .chunker import chunk_images
from .grid import fit_scale, page_count, place, place_image, starts_page

__all__ = [
    "chunk_images",
    "fit_scale",
    "page_count",
    "place",
    "place_image",
    "starts_page",
]
