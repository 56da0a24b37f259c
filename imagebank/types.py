"""
Data structures passed between the imagebank pipeline stages.

Every record is an immutable dataclass. Stages create new records and
never mutate the ones they receive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class SourceImage:
    """
    A raster file discovered in the input folder.

    Attributes:
        path: Location of the source file
        size_bytes: File size on disk
        width: Decoded pixel width
        height: Decoded pixel height
    """

    path: Path
    size_bytes: int
    width: int
    height: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class NormalizedImage:
    """
    A copy of a source image inside the normalization working area.

    Attributes:
        path: Location of the normalized file
        width: Pixel width after any resize
        height: Pixel height after any resize
        resized: ``False`` for pass-through copies
    """

    path: Path
    width: int
    height: int
    resized: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def display_name(self) -> str:
        """Caption printed under the image on the page."""
        return self.path.name


@dataclass(frozen=True)
class Chunk:
    """An ordered group of images with its 1-based sequence index."""

    index: int
    images: Tuple[NormalizedImage, ...]

    def __len__(self) -> int:
        return len(self.images)


@dataclass(frozen=True)
class PlacementCell:
    """
    Where one image and its caption land on a page.

    Coordinates are in points, measured from the top-left corner of the
    page. ``starts_page`` is set for the first cell of every page.
    """

    page: int
    row: int
    column: int
    x: float
    y: float
    width: float
    height: float
    caption_x: float
    caption_y: float
    caption_width: float
    starts_page: bool = False
    wraps_row: bool = False


@dataclass(frozen=True)
class IntermediateDocument:
    """A per-chunk PDF written to the intermediate working area."""

    index: int
    path: Path
    page_count: int
    placed: int = 0
    skipped: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class FinalDocument:
    """The merged output document."""

    path: Path
    page_count: int
    sources: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class PipelineResult:
    """
    Summary of a completed pipeline run.

    Attributes:
        final: The merged output document
        source_count: Images found in the input folder
        normalized_count: Images that survived normalization
        skipped: Source images rejected as undecodable
        documents: Intermediate documents in sequence-index order
    """

    final: FinalDocument
    source_count: int
    normalized_count: int
    skipped: Tuple[Path, ...] = ()
    documents: Tuple[IntermediateDocument, ...] = field(default_factory=tuple)

    @property
    def chunk_count(self) -> int:
        return len(self.documents)


__all__ = [
    "SourceImage",
    "NormalizedImage",
    "Chunk",
    "PlacementCell",
    "IntermediateDocument",
    "FinalDocument",
    "PipelineResult",
]
