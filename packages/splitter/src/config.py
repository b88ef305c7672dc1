"""Splitter configuration from environment variables."""
import os

# poppler-utils pdftoppm binary
PDFTOPPM_BIN = os.getenv("PDFTOPPM_BIN", "pdftoppm")

# Render resolution in DPI
PDFTOPPM_DPI = int(os.getenv("PDFTOPPM_DPI", "150"))

# Conversion timeout in seconds
PDFTOPPM_TIMEOUT = int(os.getenv("PDFTOPPM_TIMEOUT", "300"))

# Output file prefix; pdftoppm appends a zero-padded page number
PAGE_PREFIX = "page"
