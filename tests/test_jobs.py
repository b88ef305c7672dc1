import asyncio
import importlib
import json
from types import SimpleNamespace

from packages.analysis.src import PageAnalyzer
from packages.indexing.src import IndexingJob, IndexingPipeline, PageImage, RqJobQueue
from packages.indexing.src.config import INDEXING_JOB_TIMEOUT
from packages.indexing.src.queue import RQ_JOB_PATH
from packages.queue import rq_client

import apps.worker.src.jobs.index_document as index_document

from conftest import BEAM_SHEET, FakeVisionModel, as_json


class StubQueue:
    """RQ Queue 대역. enqueue 인자만 기록한다."""

    def __init__(self):
        self.calls = []

    def enqueue(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return SimpleNamespace(id=f"job-{len(self.calls)}")


def stub_queues(monkeypatch):
    queue = StubQueue()
    names = []

    def get_queue(name="default"):
        names.append(name)
        return queue

    monkeypatch.setattr(rq_client, "get_queue", get_queue)
    return queue, names


async def write_job(layout, documents, pages=2):
    document = await documents.create("p1", "sheets.pdf", pages)
    pages_dir = layout.pages_dir(document.id)
    pages_dir.mkdir(parents=True)
    images = []
    for i in range(1, pages + 1):
        path = pages_dir / f"page-{i}.png"
        path.write_bytes(b"png")
        images.append(PageImage(page_number=i, image_path=layout.relative(path)))
    return IndexingJob(project_id="p1", document_id=document.id, pages=images, project_name="Tower A", document_name="sheets.pdf")


def test_payload_survives_serialization():
    job = IndexingJob(
        project_id="p1",
        document_id="d1",
        pages=[PageImage(1, "pages/d1/page-1.png"), PageImage(2, "pages/d1/page-2.png")],
        document_name="sheets.pdf",
    )

    payload = json.loads(json.dumps(job.to_payload()))

    assert IndexingJob.from_payload(payload) == job


def test_job_path_points_at_worker_entry():
    module_path, _, name = RQ_JOB_PATH.rpartition(".")

    assert getattr(importlib.import_module(module_path), name) is index_document.run_job


async def test_rq_queue_enqueues_payload_with_timeout(monkeypatch, layout, documents):
    queue, names = stub_queues(monkeypatch)
    job = await write_job(layout, documents)

    result = await RqJobQueue(queue_name="indexing-test", job_timeout=3600).enqueue(job)

    ((args, kwargs),) = queue.calls
    assert args[0] == RQ_JOB_PATH
    assert IndexingJob.from_payload(args[1]) == job
    assert kwargs == {"job_timeout": 3600}
    assert names == ["indexing-test"]
    assert (result.document_id, result.pages, result.job_id) == (job.document_id, 2, "job-1")


async def test_rq_queue_default_timeout(monkeypatch, layout, documents):
    queue, _ = stub_queues(monkeypatch)
    job = await write_job(layout, documents, pages=1)

    await RqJobQueue().enqueue(job)

    ((_, kwargs),) = queue.calls
    assert kwargs["job_timeout"] == INDEXING_JOB_TIMEOUT


def test_rq_client_passes_options_to_queue(monkeypatch):
    queue, names = stub_queues(monkeypatch)

    job = rq_client.enqueue("some.module.func", {"a": 1}, queue_name="q1", job_timeout=-1)

    assert job.id == "job-1"
    assert queue.calls == [(("some.module.func", {"a": 1}), {"job_timeout": -1})]
    assert names == ["q1"]


async def test_run_job_processes_serialized_job(monkeypatch, layout, documents, records):
    job = await write_job(layout, documents)
    model = FakeVisionModel([as_json(BEAM_SHEET), RuntimeError("503")])
    pipeline = IndexingPipeline(PageAnalyzer(llm=model), records, documents, layout)
    monkeypatch.setattr(index_document, "_build_pipeline", lambda: pipeline)

    # RQ 워커처럼 이벤트 루프 밖에서 동기 호출
    result = await asyncio.to_thread(index_document.run_job, job.to_payload())

    assert result == {
        "document_id": job.document_id,
        "indexed": 1,
        "errors": 1,
        "failed_pages": [2],
        "stopped": False,
    }
    assert [r.page_number for r in await records.list_by_document(job.document_id)] == [1, 2]
    assert (await documents.get(job.document_id)).completed_at is not None
