from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader
from reportlab.pdfbase.pdfmetrics import stringWidth

from imagebank.config import PageGeometry
from imagebank.exceptions import ConfigurationError, DocumentWriteError, ImagePlacementError
from imagebank.render import ReportLabWriter, build_document, wrap_caption
from imagebank.types import Chunk, NormalizedImage

NormalizedFactory = Callable[..., list[NormalizedImage]]


class RecordingWriter:
    """Writer double that records calls and fails for selected images."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.pages: list[tuple[float, float]] = []
        self.images: list[tuple[str, float, float, float, float]] = []
        self.captions: list[tuple[str, float, float, float, str]] = []

    def open_page(self, size: tuple[float, float]) -> None:
        self.pages.append(size)

    def place_image(self, path: Path, x: float, y: float, width: float, height: float) -> None:
        if path.name in self.failing:
            raise ImagePlacementError(path, "cannot open")
        self.images.append((path.name, x, y, width, height))

    def place_text(self, text: str, x: float, y: float, width: float, align: str = "center") -> None:
        self.captions.append((text, x, y, width, align))

    def finalize(self) -> bytes:
        return b"%PDF-1.4 recorded"


def test_full_chunk_renders_one_page(normalized_factory: NormalizedFactory, tmp_path: Path) -> None:
    chunk = Chunk(index=1, images=tuple(normalized_factory(15)))
    destination = tmp_path / "out_1.pdf"

    document = build_document(chunk, destination, images_per_page=15)

    assert document.index == 1
    assert document.path == destination
    assert document.page_count == 1
    assert document.placed == 15
    reader = PdfReader(str(destination))
    assert len(reader.pages) == 1
    assert float(reader.pages[0].mediabox.width) == 600
    assert float(reader.pages[0].mediabox.height) == 800
    text = reader.pages[0].extract_text()
    assert "img_00.png" in text
    assert "img_14.png" in text


def test_short_chunk_renders_one_page(normalized_factory: NormalizedFactory, tmp_path: Path) -> None:
    chunk = Chunk(index=3, images=tuple(normalized_factory(2)))

    document = build_document(chunk, tmp_path / "out_3.pdf")

    assert document.page_count == 1
    assert len(PdfReader(str(document.path)).pages) == 1


def test_smaller_page_capacity_splits_chunk(normalized_factory: NormalizedFactory, tmp_path: Path) -> None:
    chunk = Chunk(index=1, images=tuple(normalized_factory(10)))

    document = build_document(chunk, tmp_path / "out.pdf", images_per_page=4)

    assert document.page_count == 3
    assert len(PdfReader(str(document.path)).pages) == 3


def test_failed_placement_leaves_gap(normalized_factory: NormalizedFactory, tmp_path: Path) -> None:
    images = normalized_factory(4)
    writer = RecordingWriter(failing={"img_01.png"})
    chunk = Chunk(index=2, images=tuple(images))

    document = build_document(
        chunk,
        tmp_path / "out.pdf",
        writer_factory=lambda: writer,
    )

    assert document.placed == 3
    assert document.skipped == (images[1].path,)
    assert writer.pages == [(600, 800)]
    positions = {name: (x, y) for name, x, y, _, _ in writer.images}
    assert positions == {
        "img_00.png": (25, 25),
        "img_02.png": (345, 25),
        "img_03.png": (25, 155),
    }
    assert [caption[0] for caption in writer.captions] == ["img_00.png", "img_02.png", "img_03.png"]
    assert all(caption[4] == "center" for caption in writer.captions)


def test_unreadable_normalized_image_is_skipped(
    normalized_factory: NormalizedFactory, tmp_path: Path
) -> None:
    images = normalized_factory(2)
    broken = tmp_path / "normalized" / "zz_broken.png"
    broken.write_bytes(b"garbage")
    chunk = Chunk(
        index=1,
        images=tuple(images) + (NormalizedImage(path=broken, width=100, height=100),),
    )

    document = build_document(chunk, tmp_path / "out.pdf")

    assert document.placed == 2
    assert document.skipped == (broken,)
    assert len(PdfReader(str(document.path)).pages) == 1


def test_write_failure_raises_document_write_error(
    normalized_factory: NormalizedFactory, tmp_path: Path
) -> None:
    chunk = Chunk(index=7, images=tuple(normalized_factory(1)))

    with pytest.raises(DocumentWriteError) as excinfo:
        build_document(chunk, tmp_path / "missing" / "out.pdf")

    assert excinfo.value.chunk_index == 7


def test_empty_chunk_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(DocumentWriteError):
        build_document(Chunk(index=1, images=()), tmp_path / "out.pdf")


def test_reportlab_writer_requires_open_page(normalized_factory: NormalizedFactory) -> None:
    image = normalized_factory(1)[0]
    writer = ReportLabWriter()

    with pytest.raises(ImagePlacementError):
        writer.place_image(image.path, 0, 0, 10, 10)


def test_reportlab_writer_flips_to_top_left_origin(
    normalized_factory: NormalizedFactory, tmp_path: Path
) -> None:
    image = normalized_factory(1)[0]
    geometry = PageGeometry()
    writer = ReportLabWriter()
    writer.open_page(geometry.page_size)
    writer.place_image(image.path, 25, 25, 150, 100)
    writer.place_text("caption", 25, 130, 150)
    data = writer.finalize()

    output = tmp_path / "single.pdf"
    output.write_bytes(data)
    page = PdfReader(str(output)).pages[0]
    content = page.get_contents().get_data().decode("latin-1")

    # drawImage emits a cm operator with the bottom-left corner: 800 - 25 - 100.
    assert "25 675 cm" in content
    assert "caption" in page.extract_text()
    assert writer.page_count == 1


def test_page_capacity_beyond_grid_is_rejected(
    normalized_factory: NormalizedFactory, tmp_path: Path
) -> None:
    chunk = Chunk(index=1, images=tuple(normalized_factory(2)))

    with pytest.raises(ConfigurationError):
        build_document(chunk, tmp_path / "out.pdf", images_per_page=30)

    assert not (tmp_path / "out.pdf").exists()


def test_long_file_name_caption_is_broken_to_slot_width() -> None:
    name = "IMG_" + "0123456789" * 6 + ".jpg"

    lines = wrap_caption(name, "Helvetica", 10, 150)

    assert len(lines) > 1
    assert "".join(lines) == name
    assert all(stringWidth(line, "Helvetica", 10) <= 150 for line in lines)


def test_short_caption_stays_on_one_line() -> None:
    assert wrap_caption("img_00.jpg", "Helvetica", 10, 150) == ["img_00.jpg"]
    assert wrap_caption("beach day.png", "Helvetica", 10, 150) == ["beach day.png"]
