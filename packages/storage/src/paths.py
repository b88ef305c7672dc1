"""File path generation helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import STORAGE_ROOT, DOCUMENTS_DIRNAME, PAGES_DIRNAME


@dataclass(frozen=True)
class StorageLayout:
    """Maps uploaded documents and rendered pages to paths under one root.

    Records keep image paths relative to ``root`` so the storage directory
    can be moved without rewriting them.
    """

    root: Path = field(default_factory=lambda: STORAGE_ROOT)

    @property
    def documents_dir(self) -> Path:
        return self.root / DOCUMENTS_DIRNAME

    def document_path(self, document_id: str) -> Path:
        """Path of the uploaded PDF for a document."""
        return self.documents_dir / f"{document_id}.pdf"

    def pages_dir(self, document_id: str) -> Path:
        """Directory holding the rendered page images of a document."""
        return self.root / PAGES_DIRNAME / document_id

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the storage root, in POSIX form."""
        return Path(path).resolve().relative_to(self.root.resolve()).as_posix()

    def resolve(self, relative_path: str) -> Path:
        return self.root / relative_path

    def ensure_dirs(self) -> None:
        """Create storage directories if they don't exist."""
        self.documents_dir.mkdir(parents=True, exist_ok=True)
        (self.root / PAGES_DIRNAME).mkdir(parents=True, exist_ok=True)
