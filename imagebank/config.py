"""Run settings for the :mod:`imagebank` pipeline."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, fields, replace
from datetime import date
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .exceptions import ConfigurationError
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("imagebank.config")

ENV_PREFIX = "IMAGEBANK_"


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page and grid constants, in points."""

    page_width: float = 600
    page_height: float = 800
    cell_max_width: float = 150
    cell_max_height: float = 100
    margin_x: float = 25
    margin_y: float = 25
    spacing_x: float = 10
    spacing_y: float = 10
    caption_allowance: float = 20
    caption_offset: float = 5
    caption_font_size: float = 10

    def __post_init__(self) -> None:
        for item in fields(self):
            if getattr(self, item.name) < 0:
                raise ConfigurationError(f"{item.name} must not be negative")
        if self.cell_max_width <= 0 or self.cell_max_height <= 0:
            raise ConfigurationError("Cell dimensions must be positive")
        if self.page_width - 2 * self.margin_x < self.cell_max_width:
            raise ConfigurationError("Page is too narrow to hold a single cell")
        if self.page_height - 2 * self.margin_y < self.cell_max_height + self.caption_allowance:
            raise ConfigurationError("Page is too short to hold a single cell")

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)

    @property
    def column_pitch(self) -> float:
        return self.cell_max_width + self.spacing_x

    @property
    def row_pitch(self) -> float:
        return self.cell_max_height + self.spacing_y + self.caption_allowance

    @property
    def columns_per_row(self) -> int:
        # A row wraps once the next cell's right edge would pass the right margin.
        usable = self.page_width - 2 * self.margin_x - self.cell_max_width
        return 1 + max(0, math.floor(usable / self.column_pitch))

    @property
    def rows_per_page(self) -> int:
        # Each row needs its cell height plus the caption line inside the bottom margin.
        usable = (
            self.page_height - 2 * self.margin_y - self.cell_max_height - self.caption_allowance
        )
        return 1 + max(0, math.floor(usable / self.row_pitch))

    @property
    def cells_per_page(self) -> int:
        return self.columns_per_row * self.rows_per_page


def _parse_int(value: str) -> int:
    return int(value.strip())


def _parse_float(value: str) -> float:
    return float(value.strip())


def _parse_date(value: str) -> date:
    return date.fromisoformat(value.strip())


def _parse_optional_int(value: str) -> Optional[int]:
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return int(value)


_ENV_FIELDS: dict[str, Callable[[str], Any]] = {
    "input_folder": Path,
    "base_dir": Path,
    "prefix": str,
    "run_date": _parse_date,
    "max_image_size_mb": _parse_float,
    "target_width": _parse_int,
    "jpeg_quality": _parse_int,
    "chunk_size": _parse_int,
    "images_per_page": _parse_int,
    "max_workers": _parse_optional_int,
}


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one pipeline run.

    ``chunk_size`` controls how many images go into each intermediate
    document while ``images_per_page`` controls page breaks inside a
    document. They default to the same value but are independent.
    """

    input_folder: Path = Path("IMG_BANK_ACR_TOTAL")
    base_dir: Path = Path(".")
    prefix: str = "IMG_BANK_ACR"
    run_date: date = field(default_factory=date.today)
    max_image_size_mb: float = 2
    target_width: int = 1920
    jpeg_quality: int = 80
    chunk_size: int = 15
    images_per_page: int = 15
    max_workers: Optional[int] = None
    geometry: PageGeometry = field(default_factory=PageGeometry)

    def __post_init__(self) -> None:
        if self.max_image_size_mb <= 0:
            raise ConfigurationError("max_image_size_mb must be positive")
        if self.target_width <= 0:
            raise ConfigurationError("target_width must be positive")
        if not 1 <= self.jpeg_quality <= 95:
            raise ConfigurationError("jpeg_quality must be between 1 and 95")
        if self.chunk_size <= 0:
            raise ConfigurationError("chunk_size must be positive")
        if self.images_per_page <= 0:
            raise ConfigurationError("images_per_page must be positive")
        if self.images_per_page > self.geometry.cells_per_page:
            raise ConfigurationError(
                f"images_per_page={self.images_per_page} exceeds the "
                f"{self.geometry.cells_per_page} cells that fit on one page"
            )
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigurationError("max_workers must be positive when set")
        if not self.prefix:
            raise ConfigurationError("prefix must not be empty")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "PipelineConfig":
        """Build a config from ``IMAGEBANK_*`` variables.

        Explicit keyword *overrides* win over the environment.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name, parser in _ENV_FIELDS.items():
            env_name = f"{ENV_PREFIX}{name.upper()}"
            raw = env.get(env_name)
            if raw is None:
                continue
            try:
                values[name] = parser(raw)
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid value for {env_name}: {raw!r}"
                ) from exc
            LOGGER.debug("Using %s=%r from environment", env_name, raw)
        values.update(overrides)
        return cls(**values)

    def with_updates(self, **changes: Any) -> "PipelineConfig":
        return replace(self, **changes)

    @property
    def date_label(self) -> str:
        return self.run_date.isoformat()

    @property
    def max_image_size_bytes(self) -> int:
        return int(self.max_image_size_mb * 1024 * 1024)

    def _under_base(self, path: PathLike) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = Path(self.base_dir) / candidate
        return ensure_path(candidate)

    @property
    def source_dir(self) -> Path:
        return self._under_base(self.input_folder)

    @property
    def normalized_dir(self) -> Path:
        return self._under_base(f"IMG_BANK_COMPRESSED_{self.date_label}")

    @property
    def documents_dir(self) -> Path:
        return self._under_base(f"output_pdfs_{self.date_label}")

    @property
    def final_path(self) -> Path:
        return self._under_base(f"{self.prefix}_{self.date_label}.pdf")

    def intermediate_path(self, index: int) -> Path:
        return self.documents_dir / f"{self.prefix}_{self.date_label}_output_{index}.pdf"


__all__ = ["ENV_PREFIX", "PageGeometry", "PipelineConfig"]
