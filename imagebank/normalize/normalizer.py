"""Normalization of source images into the working area."""

from __future__ import annotations

import io
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Tuple

from PIL import Image

from ..exceptions import InvalidImage
from ..types import NormalizedImage, SourceImage
from ..utils import PathLike, ensure_directory, ensure_path, list_images, sizeof_fmt
from .validators import read_image

LOGGER = logging.getLogger("imagebank.normalize")

_TRANSPARENT_MODES = {"RGBA", "LA", "P"}


@dataclass(frozen=True)
class NormalizationReport:
    """Outcome of normalizing a whole folder."""

    images: Tuple[NormalizedImage, ...]
    skipped: Tuple[Path, ...]

    @property
    def source_count(self) -> int:
        return len(self.images) + len(self.skipped)


def _flatten(img: Image.Image) -> Image.Image:
    if img.mode in _TRANSPARENT_MODES:
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode not in {"RGB", "L"}:
        return img.convert("RGB")
    return img


def resize_image(path: PathLike, max_width: int, quality: int) -> bytes:
    """Return *path* re-encoded as JPEG, no wider than *max_width* pixels.

    Images narrower than *max_width* are re-encoded without upscaling.
    Transparency is flattened onto a white background.
    """

    image_path = ensure_path(path)
    try:
        with Image.open(image_path) as img:
            img.load()
            width, height = img.size
            if width > max_width:
                new_height = max(1, round(height * max_width / width))
                LOGGER.debug(
                    "Resizing %s: %dx%d -> %dx%d",
                    image_path.name,
                    width,
                    height,
                    max_width,
                    new_height,
                )
                resized = img.resize((max_width, new_height), Image.Resampling.LANCZOS)
            else:
                resized = img.copy()

        buffer = io.BytesIO()
        _flatten(resized).save(buffer, format="JPEG", quality=quality, optimize=True)
    except Exception as exc:  # pragma: no cover - Pillow exceptions vary
        raise InvalidImage(image_path, f"re-encode failed: {exc}") from exc
    return buffer.getvalue()


def _measure(data: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(data)) as img:
        return img.size


def normalize_image(
    source: SourceImage,
    work_dir: PathLike,
    *,
    max_size_bytes: int,
    target_width: int,
    quality: int,
) -> NormalizedImage:
    """Write the normalized copy of *source* into *work_dir*.

    Sources above *max_size_bytes* are resized and re-encoded. Anything
    else is copied unchanged. The file keeps its source name.
    """

    destination = ensure_path(work_dir) / source.name
    if source.size_bytes <= max_size_bytes:
        shutil.copyfile(source.path, destination)
        LOGGER.debug("Copied %s without compression", source.name)
        return NormalizedImage(
            path=destination,
            width=source.width,
            height=source.height,
            resized=False,
        )

    LOGGER.info("Compressing %s (%s)", source.name, sizeof_fmt(source.size_bytes))
    data = resize_image(source.path, target_width, quality)
    width, height = _measure(data)

    destination.write_bytes(data)
    LOGGER.debug(
        "Compressed %s: %s -> %s",
        source.name,
        sizeof_fmt(source.size_bytes),
        sizeof_fmt(len(data)),
    )
    return NormalizedImage(path=destination, width=width, height=height, resized=True)


def normalize_images(
    sources: Iterable[PathLike],
    work_dir: PathLike,
    *,
    max_size_bytes: int,
    target_width: int,
    quality: int,
) -> NormalizationReport:
    """Normalize every path in *sources*, skipping undecodable files.

    The returned images keep the order of *sources*.
    """

    destination = ensure_directory(work_dir)
    images: list[NormalizedImage] = []
    skipped: list[Path] = []

    for source_path in sources:
        try:
            source = read_image(source_path)
            images.append(
                normalize_image(
                    source,
                    destination,
                    max_size_bytes=max_size_bytes,
                    target_width=target_width,
                    quality=quality,
                )
            )
        except InvalidImage as exc:
            LOGGER.warning("Skipping %s", exc)
            skipped.append(exc.path)

    LOGGER.info(
        "Normalized %d image(s) into %s, skipped %d",
        len(images),
        destination,
        len(skipped),
    )
    return NormalizationReport(images=tuple(images), skipped=tuple(skipped))


def normalize_folder(
    source_dir: PathLike,
    work_dir: PathLike,
    *,
    max_size_bytes: int,
    target_width: int,
    quality: int,
) -> NormalizationReport:
    """Normalize every image in *source_dir* in name order."""

    return normalize_images(
        list_images(source_dir),
        work_dir,
        max_size_bytes=max_size_bytes,
        target_width=target_width,
        quality=quality,
    )


__all__ = [
    "NormalizationReport",
    "resize_image",
    "normalize_image",
    "normalize_images",
    "normalize_folder",
]
