"""
Question store (tiny):
- Loads the question set once, exposes id lookup and ordered listing.
- Read-only for the life of the process.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from pydantic import ValidationError

from dataset_loader import load_records, DatasetLoadError, DatasetValidationError
from schemas import QuestionPayload

logger = logging.getLogger(__name__)

_QUESTION_ID = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Option:
    id: str
    text: str

    @property
    def label(self) -> str:
        return f"{self.id}. {self.text}"


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    options: Tuple[Option, ...]
    correct_answer: str

    @property
    def correct_option(self) -> Option | None:
        return next((opt for opt in self.options if opt.id == self.correct_answer), None)

    @classmethod
    def from_payload(cls, payload: QuestionPayload) -> "Question":
        return cls(
            id=payload.id,
            text=payload.text,
            options=tuple(Option(id=o.id, text=o.text) for o in payload.options),
            correct_answer=payload.correctAnswer,
        )


class QuestionStore:
    def __init__(self, questions: Iterable[Question] = ()) -> None:
        ordered = tuple(questions)
        by_id: dict[int, Question] = {}
        for q in ordered:
            if q.id in by_id:
                raise DatasetValidationError(f"Duplicate question id: {q.id}")
            by_id[q.id] = q
        self._questions = ordered
        self._by_id: Mapping[int, Question] = MappingProxyType(by_id)

    @classmethod
    def empty(cls) -> "QuestionStore":
        return cls(())

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "QuestionStore":
        questions = []
        for index, raw in enumerate(records):
            try:
                payload = QuestionPayload.model_validate(raw)
            except ValidationError as e:
                raise DatasetValidationError(f"Invalid question record #{index}: {e}") from e
            questions.append(Question.from_payload(payload))
        return cls(questions)

    # ---- Public helpers --------------------------------------------------
    def get(self, question_id: int) -> Question | None:
        return self._by_id.get(question_id)

    def all(self) -> Tuple[Question, ...]:
        return self._questions

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)


def load_question_store(path: str | Path) -> QuestionStore:
    """Build the store from the static source; any failure leaves an empty store."""
    try:
        store = QuestionStore.from_records(load_records(path))
    except (DatasetLoadError, DatasetValidationError) as e:
        logger.error("Error reading the questions file: %s", e)
        return QuestionStore.empty()
    logger.info("Loaded %d question(s) from %s", len(store), path)
    return store


def parse_question_id(raw: str) -> Optional[int]:
    """Parse a URL segment as a question id; None when it is not an integer."""
    text = raw.strip()
    if not _QUESTION_ID.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # beyond the interpreter's int conversion digit limit
        return None
