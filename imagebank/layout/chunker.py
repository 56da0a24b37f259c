"""Partitioning of normalized images into per-document chunks."""

from __future__ import annotations

from typing import Sequence

from ..types import Chunk, NormalizedImage


def chunk_images(images: Sequence[NormalizedImage], capacity: int) -> list[Chunk]:
    """Split *images* into consecutive chunks of at most *capacity* items.

    Chunks are numbered from 1. Every chunk but the last is full, and
    joining the chunks in index order gives back *images* unchanged.
    """

    if capacity <= 0:
        raise ValueError("capacity must be positive")
    return [
        Chunk(index=offset // capacity + 1, images=tuple(images[offset:offset + capacity]))
        for offset in range(0, len(images), capacity)
    ]


__all__ = ["chunk_images"]
