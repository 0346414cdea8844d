"""
HTTP APIのテスト（FastAPI TestClient、LLMは偽物に差し替え）
"""
import json

import pytest
from fastapi.testclient import TestClient

from conftest import FakeLLMClient, qa_payload
from qagen.core.settings import settings
from qagen.main import app
from qagen.qa.processor import QAProcessor
from qagen.qa.store import QAStore
from qagen.routers.qa import get_processor

DOC_TEXT = " ".join(f"word{i}" for i in range(30)) + "\n"


@pytest.fixture
def docs_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "docs_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def llm():
    return FakeLLMClient(lambda content: qa_payload(5))


@pytest.fixture
def client(llm):
    processor = QAProcessor(client=llm, store=QAStore(suffix="_qa"), max_attempts=1, retry_delay_sec=0)
    app.dependency_overrides[get_processor] = lambda: processor
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "model": settings.ollama_model,
        "qa_file_suffix": settings.qa_file_suffix,
    }


def test_generate_creates_and_saves(client, docs_dir, llm):
    (docs_dir / "guide.md").write_text(DOC_TEXT, encoding="utf-8")

    response = client.post("/qa/generate", json={"source": "guide.md"})

    assert response.status_code == 200
    body = response.json()
    # 30語 → base_goal 3, generation_target 5, min_acceptable 3
    assert body["targets"] == {"base_goal": 3, "generation_target": 5, "min_acceptable": 3}
    assert body["count"] == 5
    assert body["reused"] is False
    assert len(llm.calls) == 1
    assert (docs_dir / "guide_qa.jsonl").exists()


def test_generate_reuses_existing_output(client, docs_dir, llm):
    (docs_dir / "guide.md").write_text(DOC_TEXT, encoding="utf-8")
    (docs_dir / "guide_qa.jsonl").write_text(
        "".join(json.dumps({"question": f"Q{i}", "answer": "A"}) + "\n" for i in range(3)),
        encoding="utf-8",
    )

    response = client.post("/qa/generate", json={"source": "guide.md"})

    assert response.status_code == 200
    assert response.json()["reused"] is True
    assert llm.calls == []


def test_generate_missing_document(client, docs_dir):
    response = client.post("/qa/generate", json={"source": "missing.md"})
    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "NOT_FOUND"


def test_generate_rejects_path_outside_docs_dir(client, docs_dir):
    response = client.post("/qa/generate", json={"source": "../secret.md"})
    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_INPUT"


def test_generate_requires_source(client, docs_dir):
    response = client.post("/qa/generate", json={"source": ""})
    assert response.status_code == 422


def test_get_saved_qa(client, docs_dir):
    (docs_dir / "guide_qa.jsonl").write_text(
        json.dumps({"question": "Q", "answer": "A"}) + "\n", encoding="utf-8"
    )

    response = client.get("/qa/guide.md")

    assert response.status_code == 200
    assert response.json() == {
        "source": "guide.md",
        "count": 1,
        "items": [{"question": "Q", "answer": "A"}],
    }


def test_get_without_saved_qa(client, docs_dir):
    response = client.get("/qa/guide.md")
    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "NOT_FOUND"
