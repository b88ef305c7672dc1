import stat
from pathlib import Path

import pytest

from packages.core.src.errors import ConversionError
from packages.splitter.src import pdftoppm


def fake_tool(tmp_path, body):
    script = tmp_path / "fake-pdftoppm"
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    return str(script)


@pytest.fixture
def src(tmp_path):
    path = tmp_path / "in.pdf"
    path.write_bytes(b"%PDF-1.4")
    return path


async def test_pages_returned_in_page_order(tmp_path, src, monkeypatch):
    # 인자: -r DPI -png SRC PREFIX
    tool = fake_tool(tmp_path, 'for n in 10 02 01; do touch "$5-$n.png"; done')
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_BIN", tool)
    out = tmp_path / "out" / "doc"

    pages = await pdftoppm.split_document(src, out)

    assert [p.name for p in pages] == ["page-01.png", "page-02.png", "page-10.png"]
    assert out.is_dir()


async def test_nonzero_exit_raises(tmp_path, src, monkeypatch):
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_BIN", fake_tool(tmp_path, "echo broken; exit 3"))

    with pytest.raises(ConversionError):
        await pdftoppm.split_document(src, tmp_path / "out")


async def test_zero_pages_raises(tmp_path, src, monkeypatch):
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_BIN", fake_tool(tmp_path, "exit 0"))

    with pytest.raises(ConversionError):
        await pdftoppm.split_document(src, tmp_path / "out")


async def test_missing_binary_raises(tmp_path, src, monkeypatch):
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_BIN", str(tmp_path / "does-not-exist"))

    with pytest.raises(ConversionError):
        await pdftoppm.split_document(src, tmp_path / "out")


async def test_timeout_raises(tmp_path, src, monkeypatch):
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_BIN", fake_tool(tmp_path, "sleep 5"))
    monkeypatch.setattr(pdftoppm, "PDFTOPPM_TIMEOUT", 0.1)

    with pytest.raises(ConversionError):
        await pdftoppm.split_document(src, tmp_path / "out")


@pytest.mark.parametrize(
    "name, expected",
    [("page-1.png", 1), ("page-07.png", 7), ("page-120.png", 120), ("cover.png", None), ("page-3.jpg", None)],
)
def test_page_number_from_filename(name, expected):
    assert pdftoppm.page_number_from_filename(Path("/tmp/pages") / name) == expected
