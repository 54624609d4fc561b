"""
HTTP API tests. Services are swapped for ones wired to fake collaborators
through FastAPI dependency overrides.
"""
import pytest
from fastapi.testclient import TestClient

from docs_rag.main import app
from docs_rag.api.deps import (
    get_ask_service,
    get_corpus_service,
    get_ingestion_service,
    get_record_repo,
)
from docs_rag.services.corpus_service import CorpusService
from docs_rag.services.grounding import REFUSAL_ANSWER
from docs_rag.services.ingestion_service import IngestionService
from conftest import FakeEmbedder, FakeGenerator, json_payload

client = TestClient(app)


@pytest.fixture
def wired(ab_repo, make_ask_service):
    """Point every route at the A/B store and fakes."""
    emb = FakeEmbedder({"What is alpha?": [1.0, 0.0, 0.0]}, default=[0.0, 0.0, 1.0])
    gen = FakeGenerator(json_payload("Alpha.", ["A", "Z"]))
    ask_svc = make_ask_service(ab_repo, emb, gen)
    ingest_svc = IngestionService(records=ab_repo, embedder=emb)
    app.dependency_overrides[get_ask_service] = lambda: ask_svc
    app.dependency_overrides[get_ingestion_service] = lambda: ingest_svc
    app.dependency_overrides[get_corpus_service] = lambda: CorpusService(paths=[])
    app.dependency_overrides[get_record_repo] = lambda: ab_repo
    yield {"repo": ab_repo, "embedder": emb, "generator": gen}
    app.dependency_overrides.clear()


class TestAskEndpoint:
    """Test POST /api/ask."""

    def test_answer_with_reconciled_citations(self, wired):
        response = client.post("/api/ask", json={"question": "What is alpha?"})
        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "Alpha."
        assert data["citations"] == [{"id": "A", "score": 1.0}]

    def test_refusal(self, wired):
        response = client.post("/api/ask", json={"question": "Something unrelated"})
        assert response.status_code == 200
        assert response.json() == {"answer": REFUSAL_ANSWER, "citations": []}
        assert wired["generator"].calls == []

    def test_missing_question(self, wired):
        response = client.post("/api/ask", json={})
        assert response.status_code == 400
        assert "question" in response.json()["detail"].lower()

    def test_blank_question(self, wired):
        response = client.post("/api/ask", json={"question": "   "})
        assert response.status_code == 400

    def test_collaborator_failure_is_502(self, wired):
        wired["generator"].fail = True
        response = client.post("/api/ask", json={"question": "What is alpha?"})
        assert response.status_code == 502
        assert "unavailable" in response.json()["detail"]
        assert wired["repo"].count() == 2


class TestHealthEndpoint:
    def test_health_reports_vectors(self, wired):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "vectors": 2}


class TestIngestEndpoint:
    """Test POST /api/ingest."""

    def test_ingest_appends(self, wired):
        response = client.post("/api/ingest", json={"text": "gamma delta", "source": "g.txt"})
        assert response.status_code == 201
        assert response.json() == {"chunk_count": 1}
        assert wired["repo"].count() == 3

    def test_ingest_replace(self, wired):
        response = client.post("/api/ingest", json={"text": "gamma", "source": "g.txt", "replace": True})
        assert response.status_code == 201
        assert wired["repo"].count() == 1

    def test_ingest_empty_text(self, wired):
        response = client.post("/api/ingest", json={"text": "  ", "source": "blank.txt"})
        assert response.status_code == 400

    def test_ingest_embedding_failure(self, wired):
        wired["embedder"].fail = True
        response = client.post("/api/ingest", json={"text": "gamma", "source": "g.txt", "replace": True})
        assert response.status_code == 502
        assert wired["repo"].count() == 2

    def test_source_required(self, wired):
        response = client.post("/api/ingest", json={"text": "gamma"})
        assert response.status_code == 422
        assert wired["repo"].count() == 2

    def test_same_source_twice_is_400(self, wired):
        assert client.post("/api/ingest", json={"text": "gamma", "source": "g.txt"}).status_code == 201
        response = client.post("/api/ingest", json={"text": "delta", "source": "g.txt"})
        assert response.status_code == 400
        assert "already in the store" in response.json()["detail"]
        assert wired["repo"].count() == 3


@pytest.fixture
def lazy_corpus(repo, make_ask_service, tmp_path):
    """A store whose configured corpus has not been loaded yet."""
    guide = tmp_path / "guide.txt"
    guide.write_text("guide text", encoding="utf-8")
    emb = FakeEmbedder({
        "guide text": [0.0, 1.0],
        "uploaded doc": [1.0, 0.0],
        "What was uploaded?": [1.0, 0.0],
    })
    gen = FakeGenerator(json_payload("The upload.", ["upload.txt#chunk-0"]))
    ingest_svc = IngestionService(records=repo, embedder=emb)
    corpus = CorpusService(ingestion=ingest_svc, paths=[str(guide)])
    ask_svc = make_ask_service(repo, emb, gen)
    ask_svc.corpus = corpus
    app.dependency_overrides[get_ask_service] = lambda: ask_svc
    app.dependency_overrides[get_ingestion_service] = lambda: ingest_svc
    app.dependency_overrides[get_corpus_service] = lambda: corpus
    app.dependency_overrides[get_record_repo] = lambda: repo
    yield repo
    app.dependency_overrides.clear()


class TestIngestBeforeCorpusLoad:
    """Uploads made before the first question survive the lazy corpus load."""

    def test_uploaded_records_survive_first_ask(self, lazy_corpus):
        response = client.post("/api/ingest", json={"text": "uploaded doc", "source": "upload.txt"})
        assert response.status_code == 201

        response = client.post("/api/ask", json={"question": "What was uploaded?"})
        assert response.status_code == 200
        assert response.json()["citations"] == [{"id": "upload.txt#chunk-0", "score": 1.0}]

        _, rows = lazy_corpus.snapshot()
        assert [r.id for r in rows] == ["guide.txt#chunk-0", "upload.txt#chunk-0"]

    def test_health_after_upload_keeps_both(self, lazy_corpus):
        client.post("/api/ingest", json={"text": "uploaded doc", "source": "upload.txt"})
        response = client.get("/api/health")
        assert response.json() == {"ok": True, "vectors": 2}
