"""Assemble folders of images into a single captioned PDF."""

from __future__ import annotations

from typing import Optional

__version__ = "1.0.0"

from . import layout, merge, normalize, render
from .config import PageGeometry, PipelineConfig
from .exceptions import (
    ConfigurationError,
    DocumentWriteError,
    ImageBankError,
    ImagePlacementError,
    InvalidImage,
    MergeError,
)
from .layout import chunk_images, place
from .merge import merge_documents
from .normalize import normalize_folder
from .pipeline import cleanup, run_pipeline
from .render import build_document, generate_documents
from .types import (
    Chunk,
    FinalDocument,
    IntermediateDocument,
    NormalizedImage,
    PipelineResult,
    PlacementCell,
    SourceImage,
)

__all__ = [
    "__version__",
    "layout",
    "merge",
    "normalize",
    "render",
    "PageGeometry",
    "PipelineConfig",
    "ImageBankError",
    "ConfigurationError",
    "InvalidImage",
    "ImagePlacementError",
    "DocumentWriteError",
    "MergeError",
    "SourceImage",
    "NormalizedImage",
    "Chunk",
    "PlacementCell",
    "IntermediateDocument",
    "FinalDocument",
    "PipelineResult",
    "chunk_images",
    "place",
    "normalize_folder",
    "build_document",
    "generate_documents",
    "merge_documents",
    "run_pipeline",
    "cleanup",
    "assemble",
]


def assemble(config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Convenience wrapper around :func:`pipeline.run_pipeline`."""

    return run_pipeline(config)
