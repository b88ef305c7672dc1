"""페이지 인덱싱 파이프라인 패키지."""
from .jobs import IndexingJob, PageImage, EnqueueResult, PipelineReport
from .pipeline import IndexingPipeline
from .queue import JobQueue, LocalJobQueue, RqJobQueue
from .status import StatusTracker
from .cleanup import delete_project, delete_record
from .resume import build_resume_job

__all__ = [
    "IndexingJob",
    "PageImage",
    "EnqueueResult",
    "PipelineReport",
    "IndexingPipeline",
    "JobQueue",
    "LocalJobQueue",
    "RqJobQueue",
    "StatusTracker",
    "delete_project",
    "delete_record",
    "build_resume_job",
]
