"""reportlab implementation of :class:`~imagebank.render.base.DocumentWriter`."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Tuple

from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..exceptions import ImagePlacementError

LOGGER = logging.getLogger("imagebank.render")


def wrap_caption(text: str, font_name: str, font_size: float, width: float) -> list[str]:
    """Split *text* into lines no wider than *width* points.

    Lines break on spaces first. A word wider than the slot, such as a
    long file name, is broken between characters.
    """

    lines: list[str] = []
    for line in simpleSplit(text, font_name, font_size, width) or [text]:
        current = ""
        for char in line:
            candidate = current + char
            if current and stringWidth(candidate, font_name, font_size) > width:
                lines.append(current)
                current = char
            else:
                current = candidate
        lines.append(current)
    return lines


class ReportLabWriter:
    """Draw pages onto an in-memory reportlab canvas."""

    def __init__(
        self,
        *,
        font_name: str = "Helvetica",
        font_size: float = 10,
        title: str | None = None,
    ) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer)
        if title:
            self._canvas.setTitle(title)
        self._canvas.setCreator("imagebank")
        self.font_name = font_name
        self.font_size = font_size
        self.page_count = 0
        self._page_open = False
        self._page_height = 0.0

    def open_page(self, size: Tuple[float, float]) -> None:
        if self._page_open:
            self._canvas.showPage()
        width, height = size
        self._canvas.setPageSize((width, height))
        self._page_height = float(height)
        self._page_open = True
        self.page_count += 1

    def place_image(
        self, path: Path, x: float, y: float, width: float, height: float
    ) -> None:
        if not self._page_open:
            raise ImagePlacementError(path, "no page is open")
        try:
            reader = ImageReader(str(path))
            self._canvas.drawImage(
                reader,
                x,
                self._page_height - y - height,
                width=width,
                height=height,
            )
        except Exception as exc:  # pragma: no cover - reportlab/Pillow errors vary
            raise ImagePlacementError(path, str(exc)) from exc

    def place_text(
        self, text: str, x: float, y: float, width: float, align: str = "center"
    ) -> None:
        self._canvas.setFont(self.font_name, self.font_size)
        leading = self.font_size * 1.2
        lines = wrap_caption(text, self.font_name, self.font_size, width)
        # y is the top of the text slot; reportlab draws from the baseline.
        baseline = self._page_height - y - self.font_size
        for line in lines:
            if align == "center":
                self._canvas.drawCentredString(x + width / 2, baseline, line)
            elif align == "right":
                self._canvas.drawRightString(x + width, baseline, line)
            else:
                self._canvas.drawString(x, baseline, line)
            baseline -= leading

    def finalize(self) -> bytes:
        if self._page_open:
            self._canvas.showPage()
            self._page_open = False
        self._canvas.save()
        data = self._buffer.getvalue()
        LOGGER.debug("Serialized %d page(s), %d bytes", self.page_count, len(data))
        return data


__all__ = ["ReportLabWriter", "wrap_caption"]
