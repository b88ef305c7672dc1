"""Storage package for file path management and operations."""
from .config import STORAGE_ROOT
from .paths import StorageLayout
from .file_ops import save_stream, read_bytes, remove_file, remove_document_files

__all__ = [
    "STORAGE_ROOT",
    "StorageLayout",
    "save_stream",
    "read_bytes",
    "remove_file",
    "remove_document_files",
]
