from packages.analysis.src import PageAnalyzer
from packages.indexing.src import (
    IndexingJob,
    IndexingPipeline,
    PageImage,
    build_resume_job,
    delete_project,
    delete_record,
)

from conftest import FLASHING_SHEET, FakeVisionModel, as_json


async def index_document(projects, documents, records, layout, project_id, pages=2):
    document = await documents.create(project_id, "sheets.pdf", pages)
    layout.document_path(document.id).write_bytes(b"%PDF-1.4")
    pages_dir = layout.pages_dir(document.id)
    pages_dir.mkdir(parents=True)
    images = []
    for i in range(1, pages + 1):
        path = pages_dir / f"page-{i}.png"
        path.write_bytes(b"png")
        images.append(PageImage(page_number=i, image_path=layout.relative(path)))
    job = IndexingJob(project_id=project_id, document_id=document.id, pages=images)
    model = FakeVisionModel([as_json(FLASHING_SHEET)] * pages)
    await IndexingPipeline(PageAnalyzer(llm=model), records, documents, layout).run(job)
    return document


async def test_delete_project_removes_records_and_images(projects, documents, records, layout):
    doomed = await projects.create("Doomed")
    kept = await projects.create("Kept")
    doc = await index_document(projects, documents, records, layout, doomed.id)
    other = await index_document(projects, documents, records, layout, kept.id)
    image_paths = [layout.resolve(r.image_path) for r in await records.list_by_project(doomed.id)]
    assert all(p.exists() for p in image_paths)

    await delete_project(doomed.id, projects=projects, documents=documents, records=records, layout=layout)

    assert await projects.get(doomed.id) is None
    assert await records.list_by_project(doomed.id) == []
    assert await documents.list_by_project(doomed.id) == []
    assert not any(p.exists() for p in image_paths)
    assert not layout.pages_dir(doc.id).exists()
    assert not layout.document_path(doc.id).exists()

    assert len(await records.list_by_project(kept.id)) == 2
    assert layout.pages_dir(other.id).exists()


async def test_delete_record_removes_image(projects, documents, records, layout):
    project = await projects.create("P")
    await index_document(projects, documents, records, layout, project.id)
    first, second = await records.list_by_project(project.id)

    await delete_record(first.id, records=records, layout=layout)

    assert await records.get(first.id) is None
    assert not layout.resolve(first.image_path).exists()
    assert layout.resolve(second.image_path).exists()


async def test_delete_record_with_missing_image_is_noop(projects, documents, records, layout):
    project = await projects.create("P")
    await index_document(projects, documents, records, layout, project.id, pages=1)
    (record,) = await records.list_by_project(project.id)
    layout.resolve(record.image_path).unlink()

    await delete_record(record.id, records=records, layout=layout)
    await delete_record(record.id, records=records, layout=layout)

    assert await records.get(record.id) is None


async def test_last_image_removal_cleans_page_directory(projects, documents, records, layout):
    project = await projects.create("P")
    document = await index_document(projects, documents, records, layout, project.id, pages=1)
    (record,) = await records.list_by_project(project.id)

    await delete_record(record.id, records=records, layout=layout)

    assert not layout.pages_dir(document.id).exists()


async def test_resume_job_skips_recorded_pages(projects, documents, records, layout):
    project = await projects.create("P")
    document = await index_document(projects, documents, records, layout, project.id, pages=2)
    extra = layout.pages_dir(document.id) / "page-3.png"
    extra.write_bytes(b"png")
    (first, second) = await records.list_by_document(document.id)
    await records.delete(second.id)

    job = await build_resume_job(document.id, projects=projects, documents=documents, records=records, layout=layout)

    assert [p.page_number for p in job.pages] == [2, 3]
    assert job.pages[1].image_path == layout.relative(extra)
    assert job.project_name == "P"
    assert job.document_name == "sheets.pdf"


async def test_resume_job_unknown_document(projects, documents, records, layout):
    job = await build_resume_job("missing", projects=projects, documents=documents, records=records, layout=layout)

    assert job is None


async def test_resume_keeps_page_numbers_after_record_delete(projects, documents, records, layout):
    project = await projects.create("P")
    document = await index_document(projects, documents, records, layout, project.id, pages=3)
    (first, second, third) = await records.list_by_document(document.id)
    # 3페이지는 기록 전에 중단된 상태, 2페이지는 사용자가 이미지와 함께 삭제
    await records.delete(third.id)
    await delete_record(second.id, records=records, layout=layout)

    job = await build_resume_job(document.id, projects=projects, documents=documents, records=records, layout=layout)

    third_image = layout.relative(layout.pages_dir(document.id) / "page-3.png")
    assert [(p.page_number, p.image_path) for p in job.pages] == [(3, third_image)]


async def test_resume_orders_pages_numerically(projects, documents, records, layout):
    project = await projects.create("P")
    document = await documents.create(project.id, "sheets.pdf", 10)
    pages_dir = layout.pages_dir(document.id)
    pages_dir.mkdir(parents=True)
    for i in (10, 2, 9, 1):
        (pages_dir / f"page-{i}.png").write_bytes(b"png")
    (pages_dir / "thumbnail.png").write_bytes(b"png")

    job = await build_resume_job(document.id, projects=projects, documents=documents, records=records, layout=layout)

    assert [p.page_number for p in job.pages] == [1, 2, 9, 10]
