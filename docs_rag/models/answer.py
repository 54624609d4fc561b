from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union
from pydantic import BaseModel, Field


class Citation(BaseModel):
    id: str
    score: float


class AskResult(BaseModel):
    answer: str
    citations: List[Citation] = Field(default_factory=list)


class IngestResult(BaseModel):
    chunk_count: int


class AskRequest(BaseModel):
    question: str = Field(default="", max_length=4000)


class IngestRequest(BaseModel):
    text: str
    source: str = Field(min_length=1)
    replace: bool = False


# Synthesizer output, decided once by the parser and then threaded through.
@dataclass(frozen=True)
class ParsedOutput:
    answer: str
    citations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FallbackOutput:
    raw_text: str


SynthesizerOutput = Union[ParsedOutput, FallbackOutput]
