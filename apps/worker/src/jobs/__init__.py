"""워커 잡 레지스트리."""

from .index_document import resume as resume_document  # noqa: F401
