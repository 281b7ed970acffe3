"""
Tests for the HTTP API.
"""
import importlib
import logging

import pytest
from fastapi.testclient import TestClient

from topictree.api.main import app


@pytest.fixture
def client():
    return TestClient(app)


MESSAGES = [
    {"id": "a1", "text": "python code function"},
    {"id": "a2", "text": "python function code"},
    {"id": "a3", "text": "code python function"},
    {"id": "b1", "text": "pasta sauce recipe"},
    {"id": "b2", "text": "recipe pasta sauce"},
    {"id": "b3", "text": "sauce recipe pasta"},
]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_cluster_messages(client):
    response = client.post("/api/topics", json={"messages": MESSAGES})
    assert response.status_code == 200
    body = response.json()
    assert body["total_messages"] == 6
    assert [c["id"] for c in body["clusters"]] == ["topic-0", "topic-1"]
    assert body["clusters"][0]["member_document_ids"] == ["b1", "b2", "b3"]
    assert body["clusters"][1]["terms"] == ["python", "code", "function"]
    assert body["clusters"][1]["size"] == 3


def test_cluster_messages_skips_blank(client):
    response = client.post(
        "/api/topics",
        json={"messages": [{"id": "x", "text": "  "}, {"id": "y", "text": "hello"}]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total_messages"] == 1
    assert body["clusters"][0]["label"] == "Topic"


def test_cluster_messages_empty(client):
    response = client.post("/api/topics", json={"messages": []})
    assert response.status_code == 200
    assert response.json() == {"total_messages": 0, "clusters": []}


def test_invalid_options_rejected(client):
    response = client.post("/api/topics", json={"messages": MESSAGES, "max_vocab": -5})
    assert response.status_code == 422


def test_transcript_topics(client):
    transcript = "\n---\n".join(m["text"] for m in MESSAGES)
    response = client.post("/api/transcripts/topics", json={"transcript": transcript, "k": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["total_messages"] == 6
    assert len(body["default_path"]) == 6
    assert body["root_id"] == body["default_path"][0]
    for cluster in body["clusters"]:
        for message in cluster["messages"]:
            assert message["path"][0] == body["root_id"]
            assert message["path"][-1] == message["id"]


def test_transcript_topics_blank(client):
    response = client.post("/api/transcripts/topics", json={"transcript": "   "})
    assert response.status_code == 200
    assert response.json()["clusters"] == []


def test_env_caps_apply_when_body_omits_them(client, monkeypatch):
    monkeypatch.setenv("TOPICTREE_MAX_TERMS", "1")
    response = client.post("/api/topics", json={"messages": MESSAGES})
    assert response.status_code == 200
    assert [c["terms"] for c in response.json()["clusters"]] == [["pasta"], ["python"]]


def test_body_caps_win_over_env(client, monkeypatch):
    monkeypatch.setenv("TOPICTREE_MAX_TERMS", "1")
    response = client.post("/api/topics", json={"messages": MESSAGES, "max_terms_per_label": 2})
    assert response.status_code == 200
    assert [c["terms"] for c in response.json()["clusters"]] == [
        ["pasta", "sauce"],
        ["python", "code"],
    ]


def test_env_vocab_cap_applies_to_transcripts(client, monkeypatch):
    monkeypatch.setenv("TOPICTREE_MAX_VOCAB", "0")
    transcript = "\n---\n".join(m["text"] for m in MESSAGES)
    response = client.post("/api/transcripts/topics", json={"transcript": transcript, "k": 2})
    assert response.status_code == 200
    clusters = response.json()["clusters"]
    assert all(c["terms"] == [] for c in clusters)
    assert sum(len(c["messages"]) for c in clusters) == 6


def test_importing_app_leaves_logging_alone(monkeypatch):
    import topictree.api.main as api_main

    def fail(*args, **kwargs):
        raise AssertionError("logging configured at import")

    monkeypatch.setattr(logging, "basicConfig", fail)
    importlib.reload(api_main)


def test_negative_k_is_clamped(client):
    response = client.post("/api/topics", json={"messages": MESSAGES, "k": -3})
    assert response.status_code == 200
    assert [c["size"] for c in response.json()["clusters"]] == [3, 3]


def test_invalid_env_cap_falls_back_to_default(client, monkeypatch):
    monkeypatch.setenv("TOPICTREE_MAX_TERMS", "lots")
    response = client.post("/api/topics", json={"messages": MESSAGES})
    assert response.status_code == 200
    assert response.json()["clusters"][1]["terms"] == ["python", "code", "function"]
