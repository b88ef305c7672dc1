"""File I/O operations."""
from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from .config import PAGES_DIRNAME
from .paths import StorageLayout

logger = logging.getLogger(__name__)


async def save_stream(path: Path, stream: BinaryIO) -> None:
    """Copy an uploaded file stream to ``path``.

    Args:
        path: Target file path
        stream: Readable binary stream (e.g. ``UploadFile.file``)
    """

    def _copy() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            shutil.copyfileobj(stream, f)

    await asyncio.to_thread(_copy)


async def read_bytes(path: Path) -> bytes:
    return await asyncio.to_thread(path.read_bytes)


def remove_file(layout: StorageLayout, relative_path: str | None) -> bool:
    """Delete a stored file if present.

    Args:
        layout: Storage layout the path is relative to
        relative_path: Path relative to the storage root

    Returns:
        True if a file was removed, False if it was already missing
    """
    if not relative_path:
        return False
    path = layout.resolve(relative_path)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("removed %s", path)
    _remove_empty_page_dir(layout, path.parent)
    return True


def remove_document_files(layout: StorageLayout, document_id: str) -> None:
    """Delete the uploaded PDF and the page directory of a document."""
    layout.document_path(document_id).unlink(missing_ok=True)
    shutil.rmtree(layout.pages_dir(document_id), ignore_errors=True)


def _remove_empty_page_dir(layout: StorageLayout, directory: Path) -> None:
    # 문서의 마지막 페이지 이미지가 지워지면 페이지 디렉터리도 정리
    if directory.parent.resolve() != (layout.root / PAGES_DIRNAME).resolve():
        return
    if directory.is_dir() and next(directory.iterdir(), None) is None:
        directory.rmdir()
