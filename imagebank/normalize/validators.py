"""Validation helpers for source images."""

from __future__ import annotations

import logging

from PIL import Image

from ..exceptions import InvalidImage
from ..types import SourceImage
from ..utils import PathLike, ensure_path

LOGGER = logging.getLogger("imagebank.normalize")


def read_image(path: PathLike) -> SourceImage:
    """Decode the header of *path* and return a :class:`SourceImage`.

    ``InvalidImage`` is raised when the file cannot be opened or fails
    Pillow's integrity check.
    """

    image_path = ensure_path(path)
    LOGGER.debug("Validating image at %s", image_path)
    try:
        size_bytes = image_path.stat().st_size
        with Image.open(image_path) as img:
            width, height = img.size
            img.verify()
    except Exception as exc:  # pragma: no cover - Pillow exceptions vary
        raise InvalidImage(image_path, str(exc)) from exc

    if width <= 0 or height <= 0:
        raise InvalidImage(image_path, "image has no pixels")

    return SourceImage(
        path=image_path,
        size_bytes=size_bytes,
        width=width,
        height=height,
    )


__all__ = ["read_image"]
