"""Parallel generation of intermediate documents."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..config import PageGeometry
from ..exceptions import DocumentWriteError
from ..types import Chunk, IntermediateDocument
from .base import WriterFactory
from .builder import build_document

LOGGER = logging.getLogger("imagebank.render")


def _cancel_pending(futures: dict[Future, int]) -> int:
    cancelled = 0
    for future in futures:
        if future.cancel():
            cancelled += 1
    return cancelled


def generate_documents(
    chunks: Sequence[Chunk],
    path_for: Callable[[int], Path],
    *,
    geometry: Optional[PageGeometry] = None,
    images_per_page: int = 15,
    max_workers: Optional[int] = None,
    writer_factory: Optional[WriterFactory] = None,
) -> list[IntermediateDocument]:
    """Build one document per chunk concurrently.

    Every chunk is submitted before any result is awaited, and the call
    returns only once every started build has finished. Results are
    ordered by chunk index, never by completion order.

    Args:
        chunks: Chunks to render.
        path_for: Maps a chunk index to its output path.
        max_workers: Pool bound. Defaults to one worker per chunk.

    Raises:
        DocumentWriteError: If any build fails. With one worker per
            chunk every build runs to completion first. With a smaller
            pool, builds still queued are cancelled.
    """

    if not chunks:
        return []

    geometry = geometry or PageGeometry()
    workers = min(max_workers or len(chunks), len(chunks))
    bounded = workers < len(chunks)
    LOGGER.info("Generating %d document(s) with %d worker(s)", len(chunks), workers)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="imagebank") as executor:
        futures: dict[Future, int] = {
            executor.submit(
                build_document,
                chunk,
                path_for(chunk.index),
                geometry=geometry,
                images_per_page=images_per_page,
                writer_factory=writer_factory,
            ): chunk.index
            for chunk in chunks
        }
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        if bounded and any(not future.cancelled() and future.exception() for future in done):
            cancelled = _cancel_pending(futures)
            if cancelled:
                LOGGER.warning("Cancelled %d pending document build(s)", cancelled)
        wait(futures)

    documents: list[IntermediateDocument] = []
    failures: list[tuple[int, BaseException]] = []
    for future, index in futures.items():
        if future.cancelled():
            continue
        exc = future.exception()
        if exc is not None:
            LOGGER.error("Chunk %d failed: %s", index, exc)
            failures.append((index, exc))
        else:
            documents.append(future.result())

    if failures:
        failures.sort(key=lambda item: item[0])
        indexes = ", ".join(str(index) for index, _ in failures)
        first_index, first_exc = failures[0]
        raise DocumentWriteError(
            f"Failed to generate intermediate document(s) for chunk(s) {indexes}",
            chunk_index=first_index,
        ) from first_exc

    documents.sort(key=lambda document: document.index)
    return documents


__all__ = ["generate_documents"]
