"""Top-K sample selection and best-of-N reranking against a job description.

Both operations vectorize the query together with everything being ranked so
all vectors share one IDF, then sort by cosine similarity to the query. Ties
keep input order. Nothing is cached between calls.
"""
from __future__ import annotations
import logging
import math
from typing import Sequence

from proposal_matcher.models import BestOfN, Candidate, CandidateScore, Document, RankedResult
from proposal_matcher.ranking.similarity import cosine_similarity
from proposal_matcher.ranking.vectorizer import vectorize

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a ranking call is made with nothing to rank or a bad k."""


def rank_documents(query: str, corpus: Sequence[Document]) -> list[RankedResult]:
    """Score every corpus document against the query, best first."""
    if not corpus:
        raise InvalidInputError("Cannot rank an empty corpus")

    vectors = vectorize([query] + [doc.content for doc in corpus])
    query_vec = vectors[0]

    ranked = [
        RankedResult(item=doc, score=cosine_similarity(query_vec, vec))
        for doc, vec in zip(corpus, vectors[1:])
    ]
    # sorted() is stable, so equal scores stay in corpus order
    return sorted(ranked, key=lambda r: r.score, reverse=True)


def select_top_k(query: str, corpus: Sequence[Document], k: int) -> list[Document]:
    """Return the k corpus documents most similar to the query.

    When the corpus holds k documents or fewer it is returned as stored,
    without scoring.
    """
    if not corpus:
        raise InvalidInputError("Cannot select from an empty corpus")
    if k < 0:
        raise InvalidInputError(f"k must be non-negative, got {k}")

    if len(corpus) <= k:
        return list(corpus)

    ranked = rank_documents(query, corpus)
    summary = ", ".join(f"{r.item.name}={r.score:.3f}" for r in ranked[:k])
    logger.debug(f"Top-{k} of {len(corpus)} samples: {summary}")
    return [r.item for r in ranked[:k]]


def _score_candidates(query: str, candidates: Sequence[Candidate]) -> list[CandidateScore]:
    texts = [c.text if isinstance(c.text, str) else "" for c in candidates]
    vectors = vectorize([query] + texts)
    query_vec = vectors[0]

    outcomes: list[CandidateScore] = []
    for index, (candidate, vec) in enumerate(zip(candidates, vectors[1:])):
        if not isinstance(candidate.text, str):
            outcomes.append(CandidateScore(index=index, error=f"non-text candidate ({type(candidate.text).__name__})"))
            continue
        if not candidate.text.strip():
            outcomes.append(CandidateScore(index=index, error="empty candidate"))
            continue

        score = cosine_similarity(query_vec, vec)
        if not math.isfinite(score):
            outcomes.append(CandidateScore(index=index, error="non-finite score"))
            continue
        outcomes.append(CandidateScore(index=index, score=score))

    return outcomes


def select_best(query: str, candidates: Sequence[Candidate]) -> BestOfN:
    """Pick the candidate closest to the query; the rest keep their input order.

    Candidates that cannot be scored count as 0. On an exact tie the earliest
    candidate wins.
    """
    if not candidates:
        raise InvalidInputError("Cannot select from an empty candidate set")

    scores = _score_candidates(query, candidates)

    best = scores[0]
    for outcome in scores[1:]:
        if outcome.score > best.score:
            best = outcome

    for outcome in scores:
        if not outcome.ok:
            logger.warning(f"Candidate {outcome.index} scored as 0: {outcome.error}")

    winner = candidates[best.index]
    rest = [c for i, c in enumerate(candidates) if i != best.index]
    logger.info(f"Best candidate: #{best.index} ({winner.label or 'unlabelled'}) score={best.score:.3f}")

    return BestOfN(
        winner=RankedResult(item=winner, score=best.score),
        winner_index=best.index,
        rest=rest,
        scores=scores,
    )
