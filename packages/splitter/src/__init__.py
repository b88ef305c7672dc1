"""Splitter package for rendering PDF pages to images."""
from .pdftoppm import Splitter, page_number_from_filename, split_document
from .config import PDFTOPPM_BIN, PDFTOPPM_DPI, PDFTOPPM_TIMEOUT

__all__ = [
    "Splitter",
    "split_document",
    "page_number_from_filename",
    "PDFTOPPM_BIN",
    "PDFTOPPM_DPI",
    "PDFTOPPM_TIMEOUT",
]
