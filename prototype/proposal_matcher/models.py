from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """A stored sample proposal."""
    name: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "content": self.content}


@dataclass(frozen=True)
class Candidate:
    """A generated text competing in best-of-N selection.

    `text` comes straight from the generation collaborator and may be malformed;
    the ranker treats anything that is not a string as an empty document.
    """
    text: Any
    label: str = ""


@dataclass
class RankedResult:
    item: Any  # Document or Candidate
    score: float = 0.0


@dataclass
class CandidateScore:
    """Per-candidate scoring outcome. `error` is set when the candidate could not be scored."""
    index: int
    score: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BestOfN:
    winner: RankedResult
    winner_index: int = 0
    rest: list[Candidate] = field(default_factory=list)
    scores: list[CandidateScore] = field(default_factory=list)


@dataclass
class GenerationResult:
    provider: str
    sample_index: int
    text: str
    duration_ms: int = 0
