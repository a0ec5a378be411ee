from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class RelatedWord(BaseModel):
    word: str
    x: float
    y: float


RelatedWordSet = List[RelatedWord]


class HealthResponse(BaseModel):
    status: str
    service: str
    configured: bool
    model: str


class RelatedWordsRequest(BaseModel):
    word: str = Field(default="", max_length=100)


class RelatedWordsResponse(BaseModel):
    target_word: str
    words: List[RelatedWord]
    count: int
    x_domain: Tuple[int, int]
    y_domain: Tuple[int, int]


class ErrorDetail(BaseModel):
    category: str
    message: str
    retriable: bool = True
