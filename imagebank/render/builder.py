"""Generation of one intermediate PDF per chunk."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..config import PageGeometry
from ..exceptions import ConfigurationError, DocumentWriteError, ImagePlacementError
from ..layout.grid import page_count, place_image, starts_page
from ..types import Chunk, IntermediateDocument
from ..utils import PathLike, ensure_path
from .base import DocumentWriter, WriterFactory
from .reportlab_writer import ReportLabWriter

LOGGER = logging.getLogger("imagebank.render")


def write_durably(destination: Path, data: bytes) -> None:
    """Write *data* to *destination* and fsync it before returning."""

    with destination.open("wb") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())


def draw_chunk(
    chunk: Chunk,
    writer: DocumentWriter,
    geometry: PageGeometry,
    images_per_page: int,
) -> tuple[int, tuple[Path, ...]]:
    """Draw every image of *chunk* through *writer*.

    Returns ``(placed, skipped)``. An image that cannot be placed
    is logged and left as an empty cell; the images after it keep their
    own grid positions.
    """

    placed = 0
    skipped: list[Path] = []
    for index, image in enumerate(chunk.images):
        if starts_page(index, images_per_page):
            writer.open_page(geometry.page_size)
        try:
            cell = place_image(index, image, geometry, images_per_page)
            writer.place_image(image.path, cell.x, cell.y, cell.width, cell.height)
            writer.place_text(
                image.display_name,
                cell.caption_x,
                cell.caption_y,
                cell.caption_width,
                align="center",
            )
        except ImagePlacementError as exc:
            LOGGER.warning("Chunk %d: %s", chunk.index, exc)
            skipped.append(image.path)
            continue
        placed += 1
    return placed, tuple(skipped)


def build_document(
    chunk: Chunk,
    destination: PathLike,
    *,
    geometry: Optional[PageGeometry] = None,
    images_per_page: int = 15,
    writer_factory: Optional[WriterFactory] = None,
) -> IntermediateDocument:
    """Render *chunk* into a PDF at *destination*.

    Raises:
        ConfigurationError: If *images_per_page* cells do not fit on a page.
        DocumentWriteError: If the chunk is empty, the document cannot be
            serialized, or the file cannot be written and flushed.
    """

    geometry = geometry or PageGeometry()
    output_path = ensure_path(destination)
    if not chunk.images:
        raise DocumentWriteError(f"Chunk {chunk.index} has no images", chunk_index=chunk.index)
    if not 0 < images_per_page <= geometry.cells_per_page:
        raise ConfigurationError(
            f"images_per_page={images_per_page} does not fit the "
            f"{geometry.cells_per_page} cells of a page"
        )

    if writer_factory is None:
        writer: DocumentWriter = ReportLabWriter(font_size=geometry.caption_font_size)
    else:
        writer = writer_factory()

    LOGGER.debug("Building chunk %d (%d images) into %s", chunk.index, len(chunk), output_path)
    placed, skipped = draw_chunk(chunk, writer, geometry, images_per_page)
    pages = page_count(len(chunk), images_per_page)

    try:
        data = writer.finalize()
        write_durably(output_path, data)
    except Exception as exc:
        LOGGER.error("Failed to write chunk %d to %s: %s", chunk.index, output_path, exc)
        raise DocumentWriteError(
            f"Unable to write intermediate document {output_path} for chunk {chunk.index}",
            chunk_index=chunk.index,
        ) from exc

    LOGGER.info(
        "Wrote %s (%d page(s), %d image(s) placed, %d skipped)",
        output_path.name,
        pages,
        placed,
        len(skipped),
    )
    return IntermediateDocument(
        index=chunk.index,
        path=output_path,
        page_count=pages,
        placed=placed,
        skipped=skipped,
    )


__all__ = ["build_document", "draw_chunk", "write_durably"]
