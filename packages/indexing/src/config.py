"""Indexing configuration from environment variables."""
import os

# "local": in-process asyncio tasks, "rq": Redis-backed RQ worker
INDEXING_BACKEND = os.getenv("INDEXING_BACKEND", "local")

# RQ queue consumed by `python -m apps.worker.main worker`
INDEXING_QUEUE_NAME = os.getenv("INDEXING_QUEUE_NAME", "indexing")

# RQ job timeout in seconds for one document (-1: no limit).
# RQ's default of 180s would kill long documents mid-loop.
INDEXING_JOB_TIMEOUT = int(os.getenv("INDEXING_JOB_TIMEOUT", "-1"))
