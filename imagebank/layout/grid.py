"""Grid placement of images on fixed-size pages.

Placement is computed from the image's index within its chunk, so any
cell can be derived without walking the ones before it. The row and
column come from ``slot // columns`` and ``slot % columns`` where
``slot`` is the index modulo the per-page capacity.
"""

from __future__ import annotations

import math

from ..config import PageGeometry
from ..exceptions import ImagePlacementError
from ..types import NormalizedImage, PlacementCell


def fit_scale(width: float, height: float, geometry: PageGeometry) -> float:
    """Return the uniform scale that fits *width* x *height* into one cell."""

    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return min(geometry.cell_max_width / width, geometry.cell_max_height / height)


def starts_page(index: int, images_per_page: int) -> bool:
    return index % images_per_page == 0


def page_count(image_count: int, images_per_page: int) -> int:
    """Number of pages needed for *image_count* images."""

    return math.ceil(image_count / images_per_page)


def place(
    index: int,
    width: float,
    height: float,
    geometry: PageGeometry,
    images_per_page: int,
) -> PlacementCell:
    """Compute the :class:`PlacementCell` for the image at *index*.

    Raises:
        ValueError: If *index* is negative or the image has no area.
    """

    if index < 0:
        raise ValueError("index must not be negative")
    if images_per_page <= 0:
        raise ValueError("images_per_page must be positive")

    scale = fit_scale(width, height, geometry)
    scaled_width = width * scale
    scaled_height = height * scale

    columns = geometry.columns_per_row
    slot = index % images_per_page
    row, column = divmod(slot, columns)
    x = geometry.margin_x + column * geometry.column_pitch
    y = geometry.margin_y + row * geometry.row_pitch

    return PlacementCell(
        page=index // images_per_page,
        row=row,
        column=column,
        x=x,
        y=y,
        width=scaled_width,
        height=scaled_height,
        caption_x=x,
        caption_y=y + scaled_height + geometry.caption_offset,
        caption_width=geometry.cell_max_width,
        starts_page=slot == 0,
        wraps_row=column == columns - 1,
    )


def place_image(
    index: int,
    image: NormalizedImage,
    geometry: PageGeometry,
    images_per_page: int,
) -> PlacementCell:
    """Like :func:`place`, raising ``ImagePlacementError`` on bad input."""

    try:
        return place(index, image.width, image.height, geometry, images_per_page)
    except (ValueError, ZeroDivisionError) as exc:
        raise ImagePlacementError(image.path, str(exc)) from exc


__all__ = [
    "fit_scale",
    "starts_page",
    "page_count",
    "place",
    "place_image",
]
