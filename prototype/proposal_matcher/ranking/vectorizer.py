"""Term extraction and TF-IDF weighting over a document set.

Built on scikit-learn's TfidfVectorizer, configured for raw term counts and
IDF = ln(N / DF) + 1 with no row normalization. One vectorizer is fitted per
call over the full set (query included), so vectors are only comparable with
other vectors from the same call.
"""
from __future__ import annotations
import logging
from typing import Any, Sequence
from sklearn.feature_extraction.text import TfidfVectorizer

from proposal_matcher.config import RANK_STOP_WORDS

logger = logging.getLogger(__name__)

# Word-like tokens, single characters included
TOKEN_PATTERN = r"(?u)\b\w+\b"


def _build_vectorizer() -> TfidfVectorizer:
    return TfidfVectorizer(
        lowercase=True,
        token_pattern=TOKEN_PATTERN,
        stop_words=RANK_STOP_WORDS,
        norm=None,
        use_idf=True,
        smooth_idf=False,
        sublinear_tf=False,
    )


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def extract_terms(text: Any) -> list[str]:
    """Split text into lowercased word tokens, in order of appearance."""
    text = _as_text(text)
    if not text:
        return []
    analyzer = _build_vectorizer().build_analyzer()
    return list(analyzer(text))


def vectorize(texts: Sequence[Any]) -> list[dict[str, float]]:
    """Return one {term: weight} mapping per input text, same order.

    Weight is raw TF x (ln(N / DF) + 1). A text with no terms maps to {}.
    """
    docs = [_as_text(t) for t in texts]
    if not docs:
        return []

    # TfidfVectorizer refuses to fit an empty vocabulary
    if not any(extract_terms(d) for d in docs):
        return [{} for _ in docs]

    vectorizer = _build_vectorizer()
    matrix = vectorizer.fit_transform(docs).tocsr()
    terms = vectorizer.get_feature_names_out()

    vectors: list[dict[str, float]] = []
    for row in range(matrix.shape[0]):
        start, end = matrix.indptr[row], matrix.indptr[row + 1]
        vectors.append({
            str(terms[col]): float(weight)
            for col, weight in zip(matrix.indices[start:end], matrix.data[start:end])
            if weight > 0
        })

    logger.debug(f"Vectorized {len(docs)} documents over {len(terms)} terms")
    return vectors
