"""공용 테스트 픽스처: 메모리 저장소, 가짜 분할기, 가짜 비전 모델."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Iterable, Union

import httpx
import pytest
from langchain_core.messages import AIMessage

from apps.api.main import create_app
from apps.api.src.services import assemble_services
from packages.analysis.src import PageAnalyzer
from packages.core.src.errors import ConversionError
from packages.db.src.memory import InMemoryDocumentStore, InMemoryIndexRecordStore, InMemoryProjectStore
from packages.storage.src import StorageLayout

BEAM_SHEET = {
    "sheetTitle": "S-501 Steel Connections",
    "detailCount": 2,
    "details": [
        {
            "title": "Detail 1 - Beam to Column",
            "description": "Moment connection with bolted flange plates",
            "keywords": ["beam", "steel"],
            "location": "top-left",
        },
        {
            "title": "Detail 2 - Base Plate",
            "description": "Anchor bolts into concrete footing",
            "keywords": ["base plate", "anchor bolt"],
            "location": "Bottom Right",
        },
    ],
    "generalKeywords": ["structural", "connections"],
    "overallSummary": "Steel connection details.",
}

FLASHING_SHEET = {
    "sheetTitle": "A-702",
    "details": [
        {
            "title": "Parapet Flashing",
            "description": "Metal coping over membrane",
            "keywords": ["flashing", "parapet"],
            "location": "full-sheet",
        }
    ],
    "generalKeywords": ["roof"],
    "overallSummary": "Roof edge detail.",
}

Response = Union[str, Exception]


class FakeVisionModel:
    """응답을 순서대로 돌려주는 채팅 모델 대역. Exception이면 raise."""

    def __init__(self, responses: Iterable[Response] = (), gate: asyncio.Event | None = None):
        self.responses = list(responses)
        self.gate = gate
        self.calls: list = []

    async def ainvoke(self, messages):
        if self.gate is not None:
            await self.gate.wait()
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return AIMessage(content=response)


def as_json(data: dict, fenced: bool = False) -> str:
    text = json.dumps(data)
    return f"```json\n{text}\n```" if fenced else text


def make_splitter(pages: int = 3):
    async def split(src: Path, output_dir: Path) -> list[Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for i in range(1, pages + 1):
            path = output_dir / f"page-{i:02d}.png"
            path.write_bytes(b"\x89PNG page %d" % i)
            paths.append(path)
        return paths

    return split


async def failing_splitter(src: Path, output_dir: Path) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    raise ConversionError("pdftoppm exited with 1")


@pytest.fixture
def layout(tmp_path) -> StorageLayout:
    layout = StorageLayout(root=tmp_path / "storage")
    layout.ensure_dirs()
    return layout


@pytest.fixture
def projects() -> InMemoryProjectStore:
    return InMemoryProjectStore()


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def records() -> InMemoryIndexRecordStore:
    return InMemoryIndexRecordStore()


@pytest.fixture
def vision_model() -> FakeVisionModel:
    return FakeVisionModel(
        [
            as_json(BEAM_SHEET),
            RuntimeError("upstream returned 503"),
            as_json(FLASHING_SHEET, fenced=True),
        ]
    )


@pytest.fixture
def splitter():
    return make_splitter(pages=3)


@pytest.fixture
def services(projects, documents, records, layout, splitter, vision_model):
    return assemble_services(
        projects=projects,
        documents=documents,
        records=records,
        layout=layout,
        splitter=splitter,
        analyzer=PageAnalyzer(llm=vision_model),
        backend="local",
    )


@pytest.fixture
async def client(services):
    app = create_app(services)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    await services.queue.drain()
