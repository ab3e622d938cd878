"""Tests for the typer CLI."""

from pathlib import Path

import numpy as np
import pytest
from typer.testing import CliRunner

from lithogen.cli import app

runner = CliRunner()


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    cv2 = pytest.importorskip("cv2")
    folder = tmp_path / "bulk-process"
    folder.mkdir()
    cv2.imwrite(str(folder / "a.png"), np.full((12, 16), 90, dtype=np.uint8))
    cv2.imwrite(str(folder / "b.png"), np.full((8, 8), 200, dtype=np.uint8))
    (folder / "readme.txt").write_text("skip me")
    return folder


def test_generate(image_dir: Path, tmp_path: Path):
    out = tmp_path / "out"
    result = runner.invoke(app, ["generate", str(image_dir / "a.png"), "--out", str(out), "--hangars", "1"])
    assert result.exit_code == 0, result.output
    binary = out / "a-binary.stl"
    assert (out / "a.stl").exists()
    # 18x14 grid after the 1 px border
    expected = 2 * 17 * 13 + 10 + 2 * 18 + 2 * 14 + 128
    assert binary.stat().st_size == 84 + 50 * expected


def test_generate_rejects_bad_hangar_count(image_dir: Path, tmp_path: Path):
    result = runner.invoke(app, ["generate", str(image_dir / "a.png"), "--out", str(tmp_path), "--hangars", "3"])
    assert result.exit_code != 0


def test_bulk(image_dir: Path, tmp_path: Path):
    out = tmp_path / "bulk-outputs"
    result = runner.invoke(app, ["bulk", str(image_dir), str(out)])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.iterdir()) == ["a-binary.stl", "a.stl", "b-binary.stl", "b.stl"]


def test_inspect(image_dir: Path, tmp_path: Path):
    out = tmp_path / "out"
    runner.invoke(app, ["generate", str(image_dir / "b.png"), "--out", str(out)])
    for name in ("b.stl", "b-binary.stl"):
        result = runner.invoke(app, ["inspect", str(out / name)])
        assert result.exit_code == 0, result.output
        assert "Triangles" in result.output


def test_inspect_corrupt_binary(tmp_path: Path):
    bad = tmp_path / "bad.stl"
    bad.write_bytes(b"\0" * 90)
    result = runner.invoke(app, ["inspect", str(bad)])
    assert result.exit_code == 1


def test_inspect_undecodable_ascii(tmp_path: Path):
    bad = tmp_path / "bad.stl"
    bad.write_bytes(b"solid x\nfacet normal \xff\xfe 0 1\n")
    result = runner.invoke(app, ["inspect", str(bad)])
    assert result.exit_code == 1
    assert "SerializationError" in result.output


def test_inspect_malformed_ascii(tmp_path: Path):
    bad = tmp_path / "bad.stl"
    bad.write_text("solid x\nfacet normal 0 0\nendsolid x\n")
    result = runner.invoke(app, ["inspect", str(bad)])
    assert result.exit_code == 1
    assert "SerializationError" in result.output


def test_bulk_continues_past_unwritable_output(image_dir: Path, tmp_path: Path):
    out = tmp_path / "bulk-outputs"
    (out / "a.stl").mkdir(parents=True)
    result = runner.invoke(app, ["bulk", str(image_dir), str(out)])
    assert result.exit_code == 1
    assert (out / "a.stl").is_dir()
    assert not (out / "a-binary.stl").exists()
    assert (out / "b.stl").is_file()
    assert (out / "b-binary.stl").is_file()
