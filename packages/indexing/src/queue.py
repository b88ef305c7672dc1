"""인덱싱 잡 큐.

업로드 요청은 잡을 넣기만 하고 바로 응답한다. 잡 하나는 문서 한 건이며,
그 안의 페이지는 파이프라인이 순서대로 처리한다. 서로 다른 문서의 잡은
서로를 기다리지 않는다.
"""
from __future__ import annotations

import abc
import asyncio
import logging

from .config import INDEXING_JOB_TIMEOUT, INDEXING_QUEUE_NAME
from .jobs import EnqueueResult, IndexingJob
from .pipeline import IndexingPipeline

logger = logging.getLogger(__name__)

RQ_JOB_PATH = "apps.worker.src.jobs.index_document.run_job"


class JobQueue(abc.ABC):
    @abc.abstractmethod
    async def enqueue(self, job: IndexingJob) -> EnqueueResult:
        ...

    async def drain(self) -> None:
        """진행 중인 잡이 끝날 때까지 대기 (프로세스 내 큐만 해당)."""


class LocalJobQueue(JobQueue):
    """API 프로세스 안에서 asyncio 태스크로 잡을 실행."""

    def __init__(self, pipeline: IndexingPipeline):
        self.pipeline = pipeline
        self._tasks: set[asyncio.Task] = set()

    async def enqueue(self, job: IndexingJob) -> EnqueueResult:
        task = asyncio.create_task(self._run(job), name=f"index-{job.document_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("인덱싱 잡 등록(local): document=%s pages=%d", job.document_id, len(job.pages))
        return EnqueueResult(document_id=job.document_id, pages=len(job.pages))

    async def _run(self, job: IndexingJob) -> None:
        try:
            await self.pipeline.run(job)
        except Exception:
            # 페이지 단위 실패는 파이프라인이 흡수한다. 여기 오는 것은 저장소 오류 등
            logger.exception("인덱싱 잡 실패: document=%s", job.document_id)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


class RqJobQueue(JobQueue):
    """Redis/RQ 워커 프로세스로 잡을 넘긴다."""

    def __init__(self, queue_name: str = INDEXING_QUEUE_NAME, job_timeout: int = INDEXING_JOB_TIMEOUT):
        self.queue_name = queue_name
        self.job_timeout = job_timeout

    async def enqueue(self, job: IndexingJob) -> EnqueueResult:
        from packages.queue.rq_client import enqueue

        rq_job = await asyncio.to_thread(
            enqueue,
            RQ_JOB_PATH,
            job.to_payload(),
            queue_name=self.queue_name,
            job_timeout=self.job_timeout,
        )
        logger.info("인덱싱 잡 등록(rq): document=%s pages=%d job=%s", job.document_id, len(job.pages), rq_job.id)
        return EnqueueResult(document_id=job.document_id, pages=len(job.pages), job_id=rq_job.id)
