from __future__ import annotations

from pathlib import Path
from typing import Callable

from click.testing import CliRunner

from imagebank import __version__
from imagebank.cli import cli


def _env(tmp_path: Path, source_dir: Path) -> dict[str, str]:
    return {
        "IMAGEBANK_INPUT_FOLDER": str(source_dir),
        "IMAGEBANK_BASE_DIR": str(tmp_path),
        "IMAGEBANK_RUN_DATE": "2024-05-01",
    }


def test_cli_assembles_folder(
    tmp_path: Path, source_dir: Path, image_factory: Callable[..., Path]
) -> None:
    for index in range(4):
        image_factory(f"photo_{index}.png")

    result = CliRunner().invoke(cli, [], env=_env(tmp_path, source_dir))

    assert result.exit_code == 0, result.output
    assert (tmp_path / "IMG_BANK_ACR_2024-05-01.pdf").exists()
    assert "Done" in result.output


def test_cli_reports_errors(tmp_path: Path, source_dir: Path) -> None:
    result = CliRunner().invoke(cli, [], env=_env(tmp_path, source_dir))

    assert result.exit_code == 1
    assert "No images to assemble" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert __version__ in result.output
