import pytest
from fastapi.testclient import TestClient

from habla.application.phrases import PhraseCatalog
from habla.application.quiz_service import QuizService
from habla.application.review_service import ReviewScheduler
from habla.consts import VERSION
from habla.server import app, get_quiz_service


@pytest.fixture
def client(store, phrases, clock, mock_home):
    service = QuizService(ReviewScheduler(store, phrases, clock=clock), PhraseCatalog(phrases))
    app.dependency_overrides[get_quiz_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION


def test_get_version(client):
    assert client.get("/version").json() == {"version": VERSION}


def test_next_phrase(client):
    response = client.get("/phrases/next")
    assert response.status_code == 200
    assert response.json()["id"] == 1
    assert response.json()["english"] == "Hello"


def test_next_phrase_none_available(store, clock):
    service = QuizService(ReviewScheduler(store, [], clock=clock), PhraseCatalog([]))
    app.dependency_overrides[get_quiz_service] = lambda: service
    try:
        response = TestClient(app).get("/phrases/next")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 404


def test_check_answer(client):
    response = client.post("/answers/check", json={"answer": "Buenos diaz", "expected": "Buenos días"})
    assert response.status_code == 200
    data = response.json()
    assert data["matches"] is True
    assert data["distance"] == 1
    assert data["feedback"]["message"] == "Close enough!"


def test_check_answer_invalid_similarity(client):
    response = client.post(
        "/answers/check", json={"answer": "a", "expected": "b", "min_similarity": 2}
    )
    assert response.status_code == 422


def test_record_review(client):
    response = client.post("/reviews", json={"phrase_id": 1, "correct": True})
    assert response.status_code == 200
    data = response.json()
    assert data["repetitions"] == 1
    assert data["interval"] == 1

    # Phrase 1 is now scheduled for tomorrow
    assert client.get("/phrases/next").json()["id"] == 2


def test_record_review_unknown_phrase(client):
    response = client.post("/reviews", json={"phrase_id": 99, "correct": True})
    assert response.status_code == 404


def test_submit_answer(client):
    response = client.post("/quiz/submit", json={"phrase_id": 3, "answer": "gracias!"})
    assert response.status_code == 200
    data = response.json()
    assert data["matches"] is True
    assert data["expected"] == "Gracias"
    assert data["feedback"]["type"] == "correct"
    assert data["progress"]["correct_reviews"] == 1


def test_submit_blank_answer(client):
    response = client.post("/quiz/submit", json={"phrase_id": 1, "answer": "  "})
    assert response.status_code == 422


def test_submit_unknown_phrase(client):
    response = client.post("/quiz/submit", json={"phrase_id": 99, "answer": "hola"})
    assert response.status_code == 404


def test_stats(client):
    client.post("/reviews", json={"phrase_id": 1, "correct": True})
    client.post("/reviews", json={"phrase_id": 2, "correct": False, "skipped": True})

    data = client.get("/stats").json()
    assert data["total_phrases"] == 3
    assert data["learned"] == 2
    assert data["total_reviews"] == 2
    assert data["accuracy"] == 0.5


def test_check_answer_uses_configured_similarity(client, monkeypatch):
    monkeypatch.setenv("HABLA_MIN_SIMILARITY", "0.99")

    response = client.post("/answers/check", json={"answer": "Buenos diaz", "expected": "Buenos días"})
    assert response.json()["matches"] is False

    response = client.post(
        "/answers/check",
        json={"answer": "Buenos diaz", "expected": "Buenos días", "min_similarity": 0.85},
    )
    assert response.json()["matches"] is True
