from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Callable, Iterator
import sys

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from imagebank.config import PipelineConfig  # noqa: E402
from imagebank.types import NormalizedImage  # noqa: E402

RUN_DATE = date(2024, 5, 1)

ImageFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def reset_imagebank_logger() -> Iterator[None]:
    logger = logging.getLogger("imagebank")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture()
def source_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "IMG_BANK_ACR_TOTAL"
    folder.mkdir()
    return folder


@pytest.fixture()
def image_factory(source_dir: Path) -> ImageFactory:
    def _create(
        name: str,
        size: tuple[int, int] = (300, 200),
        color: tuple[int, ...] = (200, 40, 40),
        mode: str = "RGB",
        noisy: bool = False,
        folder: Path | None = None,
    ) -> Path:
        path = (folder or source_dir) / name
        if noisy:
            width, height = size
            img = Image.frombytes("RGB", size, os.urandom(width * height * 3))
            if mode != "RGB":
                img = img.convert(mode)
        else:
            img = Image.new(mode, size, color)
        fmt = "PNG" if path.suffix.lower() == ".png" else "JPEG"
        img.save(path, format=fmt)
        return path

    return _create


@pytest.fixture()
def corrupt_image(source_dir: Path) -> Path:
    path = source_dir / "broken.jpg"
    path.write_bytes(b"this is not an image")
    return path


@pytest.fixture()
def normalized_factory(tmp_path: Path) -> Callable[[int], list[NormalizedImage]]:
    def _create(count: int, size: tuple[int, int] = (120, 80)) -> list[NormalizedImage]:
        folder = tmp_path / "normalized"
        folder.mkdir(exist_ok=True)
        images = []
        for index in range(count):
            path = folder / f"img_{index:02d}.png"
            Image.new("RGB", size, (10 * (index % 25), 100, 150)).save(path, format="PNG")
            images.append(NormalizedImage(path=path, width=size[0], height=size[1]))
        return images

    return _create


@pytest.fixture()
def config(tmp_path: Path, source_dir: Path) -> PipelineConfig:
    return PipelineConfig(
        input_folder=source_dir,
        base_dir=tmp_path,
        run_date=RUN_DATE,
    )
