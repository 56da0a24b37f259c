"""Merge intermediate documents into the final output."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Mapping, Optional

from ..exceptions import MergeError
from ..types import FinalDocument
from ..utils import PathLike, ensure_iterable, ensure_path
from .combiner import DocumentCombiner

LOGGER = logging.getLogger("imagebank.merge")


def _replace_atomically(destination: Path, data: bytes) -> None:
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{destination.stem}-", suffix=".part", dir=destination.parent
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, destination)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def merge_documents(
    inputs: Iterable[PathLike],
    output: PathLike,
    *,
    metadata: Optional[Mapping[str, str]] = None,
) -> FinalDocument:
    """Append every page of *inputs*, in the given order, into *output*.

    *output* is written only once all inputs have been read, via a
    temporary file in the same directory that is renamed into place.

    Raises:
        MergeError: If there are no inputs, an input cannot be parsed, or
            the output cannot be written.
    """

    pdf_paths = ensure_iterable(inputs)
    if not pdf_paths:
        raise MergeError("No input PDFs provided")

    output_path = ensure_path(output)
    combiner = DocumentCombiner()

    for pdf_path in pdf_paths:
        LOGGER.debug("Appending pages from %s", pdf_path)
        try:
            pages = combiner.load_pages(pdf_path.read_bytes())
        except Exception as exc:  # pragma: no cover - dependency exceptions vary
            LOGGER.error("Failed to read %s: %s", pdf_path, exc)
            raise MergeError(f"Unable to read intermediate PDF: {pdf_path}", path=pdf_path) from exc
        combiner.append_pages(pages)

    if metadata:
        combiner.add_metadata(metadata)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        _replace_atomically(output_path, combiner.save())
    except Exception as exc:  # pragma: no cover - IO errors vary
        LOGGER.error("Failed to write merged PDF to %s: %s", output_path, exc)
        raise MergeError(f"Failed to write merged PDF to {output_path}", path=output_path) from exc

    LOGGER.info(
        "Merged %d PDF(s) into %s (%d pages)",
        len(pdf_paths),
        output_path,
        combiner.page_count,
    )
    return FinalDocument(
        path=output_path,
        page_count=combiner.page_count,
        sources=tuple(pdf_paths),
    )


__all__ = ["merge_documents"]
