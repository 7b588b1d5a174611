"""Proposal writer: one generation call per matched sample.

Talks to any Anthropic-compatible Messages endpoint. Provider failures never
raise; they come back as short placeholder texts so the caller can still rank
whatever it received.
"""
from __future__ import annotations
import json
import logging
import time
from anthropic import Anthropic, APIError, APIStatusError

from proposal_matcher.config import (
    GENERATION_API_KEY,
    GENERATION_BASE_URL,
    GENERATION_MAX_TOKENS,
    GENERATION_MODEL,
    GENERATION_PROVIDER,
    GENERATION_TEMPERATURE,
    GENERATION_TIMEOUT_SECONDS,
)
from proposal_matcher.generation.prompts import WRITER_SYSTEM_PROMPT, build_writer_prompt
from proposal_matcher.models import Document, GenerationResult

logger = logging.getLogger(__name__)

MISSING_KEY_TEXT = "(Generation API key not set; returning placeholder text)"
EMPTY_RESPONSE_TEXT = "(Empty response)"


def _error_body(e: APIStatusError) -> str:
    body = e.body if e.body is not None else e.message
    if isinstance(body, str):
        return body
    return json.dumps(body)


class ProposalWriter:
    def __init__(
        self,
        api_key: str = GENERATION_API_KEY,
        model: str = GENERATION_MODEL,
        base_url: str | None = GENERATION_BASE_URL,
        provider: str = GENERATION_PROVIDER,
    ):
        self.model = model
        self.provider = provider
        self._client: Anthropic | None = None
        if api_key:
            self._client = Anthropic(
                api_key=api_key,
                base_url=base_url,
                timeout=GENERATION_TIMEOUT_SECONDS,
                max_retries=0,
            )

    @property
    def configured(self) -> bool:
        return self._client is not None

    def generate(self, job_description: str, sample: Document, sample_index: int = 0) -> GenerationResult:
        """Write a proposal for the job in the style of `sample`."""
        start = time.time()
        text = self._complete(job_description, sample)
        duration_ms = int((time.time() - start) * 1000)
        logger.info(f"[Writer] Sample #{sample_index} '{sample.name}' -> {len(text)} chars ({duration_ms}ms)")
        return GenerationResult(
            provider=self.provider,
            sample_index=sample_index,
            text=text,
            duration_ms=duration_ms,
        )

    def _complete(self, job_description: str, sample: Document) -> str:
        if self._client is None:
            return MISSING_KEY_TEXT

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=GENERATION_MAX_TOKENS,
                temperature=GENERATION_TEMPERATURE,
                system=WRITER_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_writer_prompt(job_description, sample)}],
            )
        except APIStatusError as e:
            logger.error(f"[Writer] Provider returned {e.status_code}: {e.message}")
            return f"(Generation error {e.status_code}) {_error_body(e)}"
        except APIError as e:
            logger.error(f"[Writer] Request failed: {e}")
            return f"(Generation request failed) {e.message}"

        text = "".join(b.text for b in response.content if b.type == "text").strip()
        return text or EMPTY_RESPONSE_TEXT


# Singleton
writer = ProposalWriter()
