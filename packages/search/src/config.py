"""Search configuration from environment variables."""
import os

# Maximum number of ranked results returned per query
SEARCH_RESULT_LIMIT = int(os.getenv("SEARCH_RESULT_LIMIT", "20"))
