"""Storage configuration from environment variables."""
import os
from pathlib import Path

# Root directory all stored relative paths resolve against
STORAGE_ROOT = Path(os.getenv("STORAGE_ROOT", "storage"))

DOCUMENTS_DIRNAME = "documents"
PAGES_DIRNAME = "pages"
