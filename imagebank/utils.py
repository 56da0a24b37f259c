"""Path and storage helpers shared by the :mod:`imagebank` stages."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, Union

PathLike = Union[str, Path]

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})

LOGGER = logging.getLogger("imagebank.utils")


def ensure_path(path: PathLike) -> Path:
    """Return an absolute :class:`~pathlib.Path` for *path*.

    User-home references are expanded and relative paths are resolved
    against the current working directory.
    """

    return Path(path).expanduser().resolve(strict=False)


def ensure_iterable(paths: Iterable[PathLike]) -> list[Path]:
    """Convert an iterable of paths to a list of :class:`Path` objects."""

    return [ensure_path(path) for path in paths]


def ensure_directory(path: PathLike) -> Path:
    directory = ensure_path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS


def list_images(folder: PathLike) -> list[Path]:
    """Return the raster images inside *folder* sorted by file name.

    Only ``.jpg``, ``.jpeg`` and ``.png`` files are returned, with the
    extension compared case-insensitively. Sorting makes the enumeration
    order stable across platforms and runs.
    """

    directory = ensure_path(folder)
    images = sorted(
        (entry for entry in directory.iterdir() if is_image_file(entry)),
        key=lambda entry: entry.name,
    )
    LOGGER.debug("Found %d image(s) in %s", len(images), directory)
    return images


def remove_tree(path: PathLike) -> bool:
    """Recursively delete *path*. Returns ``False`` when it did not exist."""

    target = ensure_path(path)
    if not target.exists():
        return False
    if target.is_dir():
        shutil.rmtree(target)
    else:
        target.unlink()
    LOGGER.debug("Removed %s", target)
    return True


def sizeof_fmt(num_bytes: float) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(num_bytes) < step_unit:
            return f"{num_bytes:3.1f} {unit}"
        num_bytes /= step_unit
    return f"{num_bytes:.1f} TiB"


__all__ = [
    "PathLike",
    "IMAGE_EXTENSIONS",
    "ensure_path",
    "ensure_iterable",
    "ensure_directory",
    "is_image_file",
    "list_images",
    "remove_tree",
    "sizeof_fmt",
]
