"""Writer protocol used by the intermediate document builder."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, Tuple


class DocumentWriter(Protocol):
    """Protocol for page-drawing backends.

    Coordinates are in points from the top-left corner of the current
    page. Implementations translate them to their own origin.
    """

    def open_page(self, size: Tuple[float, float]) -> None:
        """Start a new page of *size* ``(width, height)``."""

    def place_image(
        self, path: Path, x: float, y: float, width: float, height: float
    ) -> None:
        """Draw the image at *path*. Raises ``ImagePlacementError`` on failure."""

    def place_text(
        self, text: str, x: float, y: float, width: float, align: str = "center"
    ) -> None:
        """Draw *text* inside a slot *width* points wide."""

    def finalize(self) -> bytes:
        """Close the last page and return the serialized document."""


WriterFactory = Callable[[], DocumentWriter]


__all__ = ["DocumentWriter", "WriterFactory"]
