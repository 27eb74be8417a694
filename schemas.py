"""
Pydantic models for the question source records.
"""
from __future__ import annotations
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator


def _as_label(value: object) -> object:
    # Option ids may be written as 1, "1" or "A" in the source
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        return str(value).strip()
    return value


class OptionPayload(BaseModel):
    id: str
    text: str

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        return _as_label(value)


class QuestionPayload(BaseModel):
    id: int
    text: str
    options: List[OptionPayload] = Field(default_factory=list)   # display order matters
    correctAnswer: str

    @field_validator("correctAnswer", mode="before")
    @classmethod
    def _normalize_answer(cls, value: object) -> object:
        return _as_label(value)

    @model_validator(mode="after")
    def _answer_is_an_option(self) -> "QuestionPayload":
        ids = [opt.id for opt in self.options]
        if self.correctAnswer not in ids:
            raise ValueError(
                f"correctAnswer {self.correctAnswer!r} is not one of the options {ids}"
            )
        return self
