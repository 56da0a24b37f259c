"""End-to-end image bank assembly.

The stages run strictly in sequence: normalize, chunk, generate (in
parallel, joined before moving on), merge, clean up. Cleanup happens
only after a successful merge so a failed run leaves its working areas
behind for inspection.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import PipelineConfig
from .exceptions import ConfigurationError, MergeError
from .layout.chunker import chunk_images
from .merge.merger import merge_documents
from .normalize.normalizer import normalize_folder
from .render.base import WriterFactory
from .render.orchestrator import generate_documents
from .types import PipelineResult
from .utils import ensure_directory, remove_tree

LOGGER = logging.getLogger("imagebank.pipeline")


def prepare_working_areas(config: PipelineConfig) -> None:
    ensure_directory(config.normalized_dir)
    ensure_directory(config.documents_dir)


def cleanup(config: PipelineConfig) -> None:
    """Remove both working areas of *config*."""

    for directory in (config.normalized_dir, config.documents_dir):
        if remove_tree(directory):
            LOGGER.info("Removed working area %s", directory)


def run_pipeline(
    config: Optional[PipelineConfig] = None,
    *,
    writer_factory: Optional[WriterFactory] = None,
) -> PipelineResult:
    """Turn the images in ``config.source_dir`` into one merged PDF.

    Raises:
        ConfigurationError: If the input folder does not exist.
        MergeError: If no image survives normalization or the final
            merge fails.
        DocumentWriteError: If any intermediate document fails.
    """

    config = config or PipelineConfig.from_env()
    source_dir = config.source_dir
    if not source_dir.is_dir():
        raise ConfigurationError(f"Input folder does not exist: {source_dir}")

    LOGGER.info("Starting run for %s", source_dir)
    prepare_working_areas(config)

    report = normalize_folder(
        source_dir,
        config.normalized_dir,
        max_size_bytes=config.max_image_size_bytes,
        target_width=config.target_width,
        quality=config.jpeg_quality,
    )
    if not report.images:
        raise MergeError(f"No images to assemble from {source_dir}")

    chunks = chunk_images(report.images, config.chunk_size)
    LOGGER.info("Split %d image(s) into %d chunk(s)", len(report.images), len(chunks))

    documents = generate_documents(
        chunks,
        config.intermediate_path,
        geometry=config.geometry,
        images_per_page=config.images_per_page,
        max_workers=config.max_workers,
        writer_factory=writer_factory,
    )

    final = merge_documents(
        [document.path for document in documents],
        config.final_path,
        metadata={
            "/Title": f"{config.prefix} {config.date_label}",
            "/Producer": "imagebank",
        },
    )

    cleanup(config)
    LOGGER.info("Run finished: %s (%d pages)", final.path, final.page_count)

    return PipelineResult(
        final=final,
        source_count=report.source_count,
        normalized_count=len(report.images),
        skipped=report.skipped,
        documents=tuple(documents),
    )


__all__ = ["cleanup", "prepare_working_areas", "run_pipeline"]
