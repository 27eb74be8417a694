"""Shared fixtures: a small question set and an app client over it."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dataset import QuestionStore
from main import create_app

SAMPLE_RECORDS = [
    {
        "id": 1,
        "text": "2+2=?",
        "options": [{"id": "A", "text": "3"}, {"id": "B", "text": "4"}],
        "correctAnswer": "B",
    },
    {
        "id": 2,
        "text": "Capitale de la France",
        "options": [
            {"id": "A", "text": "Lyon"},
            {"id": "B", "text": "Paris"},
            {"id": "C", "text": "Marseille"},
        ],
        "correctAnswer": "B",
    },
    {
        "id": 7,
        "text": "Couleur du cheval blanc d'Henri IV",
        "options": [{"id": 1, "text": "Blanc"}, {"id": 2, "text": "Noir"}],
        "correctAnswer": 1,
    },
]


@pytest.fixture
def records() -> list[dict]:
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def store(records) -> QuestionStore:
    return QuestionStore.from_records(records)


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture
def empty_client():
    with TestClient(create_app(store=QuestionStore.empty())) as c:
        yield c
