"""Flat-file JSON store for sample proposals."""
from __future__ import annotations
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from proposal_matcher.config import DEFAULT_PROPOSALS_PATH, MIN_SAMPLE_PROPOSALS, PROPOSAL_STORE_PATH
from proposal_matcher.models import Document

logger = logging.getLogger(__name__)


class ProposalStoreError(RuntimeError):
    """The proposal file could not be read or written."""


def _to_documents(raw: Any, source: Path) -> list[Document]:
    """Keep only entries shaped like {"name": str, "content": str}."""
    if not isinstance(raw, list):
        logger.warning(f"{source} does not hold a list of proposals; ignoring it")
        return []

    documents = []
    for i, entry in enumerate(raw):
        if (
            isinstance(entry, dict)
            and isinstance(entry.get("name"), str)
            and isinstance(entry.get("content"), str)
        ):
            documents.append(Document(name=entry["name"], content=entry["content"]))
        else:
            logger.warning(f"Skipping malformed proposal #{i} in {source}")
    return documents


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ProposalStoreError(f"Could not read proposals from {path}: {e}") from e


class ProposalStore:
    def __init__(
        self,
        path: Path = PROPOSAL_STORE_PATH,
        defaults_path: Path = DEFAULT_PROPOSALS_PATH,
        min_proposals: int = MIN_SAMPLE_PROPOSALS,
    ):
        self.path = Path(path)
        self.defaults_path = Path(defaults_path)
        self.min_proposals = min_proposals
        self._lock = threading.Lock()

    def defaults(self) -> list[Document]:
        return _to_documents(_read_json(self.defaults_path), self.defaults_path)

    def load(self) -> list[Document]:
        """Snapshot of the stored proposals, or the built-in defaults when too few are stored."""
        if not self.path.exists():
            return self.defaults()

        documents = _to_documents(_read_json(self.path), self.path)
        if len(documents) < self.min_proposals:
            logger.info(
                f"Only {len(documents)} stored proposals (need {self.min_proposals}); using defaults"
            )
            return self.defaults()
        return documents

    def append(self, document: Document) -> Document:
        """Add a proposal and rewrite the store file."""
        if not document.name.strip() or not document.content.strip():
            raise ValueError("Both name and content are required.")

        with self._lock:
            documents = self.load()
            documents.append(document)
            self._save(documents)

        logger.info(f"Stored proposal '{document.name}' ({len(documents)} total)")
        return document

    def _save(self, documents: list[Document]) -> None:
        """Write to a sibling temp file and swap it in, so readers never see a partial file."""
        payload = json.dumps([d.to_dict() for d in documents], indent=2, ensure_ascii=False)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ProposalStoreError(f"Could not write proposals to {self.path}: {e}") from e


# Singleton
proposal_store = ProposalStore()
