"""Page-level document combination built on :mod:`pypdf`."""

from __future__ import annotations

import io
import logging
from typing import Iterable, Mapping

from pypdf import PageObject, PdfReader, PdfWriter

LOGGER = logging.getLogger("imagebank.merge")


class DocumentCombiner:
    """Accumulate pages from several PDFs into one aggregate document."""

    def __init__(self) -> None:
        self._writer = PdfWriter()

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def load_pages(self, data: bytes) -> list[PageObject]:
        """Parse *data* and return its pages in document order."""

        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            reader.decrypt("")
        return list(reader.pages)

    def append_pages(self, pages: Iterable[PageObject]) -> int:
        added = 0
        for page in pages:
            self._writer.add_page(page)
            added += 1
        return added

    def add_metadata(self, metadata: Mapping[str, str]) -> None:
        self._writer.add_metadata(dict(metadata))

    def save(self) -> bytes:
        buffer = io.BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()


__all__ = ["DocumentCombiner"]
