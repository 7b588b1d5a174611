"""Tests for the proposal writer (no network; the SDK client is mocked)."""
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from anthropic import APIConnectionError, APIStatusError

from proposal_matcher.generation.prompts import build_writer_prompt
from proposal_matcher.generation.writer import EMPTY_RESPONSE_TEXT, MISSING_KEY_TEXT, ProposalWriter
from proposal_matcher.models import Document

SAMPLE = Document(name="Sample", content="Hello,\n\nI build websites.\n\nBest regards")
JOB = "Need a landing page for a bakery"
REQUEST = httpx.Request("POST", "https://api.example.com/v1/messages")


@pytest.fixture
def writer():
    w = ProposalWriter(api_key="test-key", model="test-model", provider="test")
    w._client = MagicMock()
    return w


def _reply(*blocks):
    return SimpleNamespace(content=[SimpleNamespace(type=t, text=x) for t, x in blocks])


def test_missing_key_returns_placeholder():
    w = ProposalWriter(api_key="")
    assert not w.configured
    result = w.generate(JOB, SAMPLE, sample_index=2)
    assert result.text == MISSING_KEY_TEXT
    assert result.sample_index == 2


def test_generate_joins_text_blocks(writer):
    writer._client.messages.create.return_value = _reply(("text", "  Hi there, "), ("text", "I can help. "))
    result = writer.generate(JOB, SAMPLE, sample_index=1)

    assert result.text == "Hi there, I can help."
    assert result.provider == "test"
    assert result.sample_index == 1

    kwargs = writer._client.messages.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert JOB in kwargs["messages"][0]["content"]
    assert SAMPLE.content in kwargs["messages"][0]["content"]


def test_generate_empty_reply(writer):
    writer._client.messages.create.return_value = _reply()
    assert writer.generate(JOB, SAMPLE).text == EMPTY_RESPONSE_TEXT


def test_generate_status_error_becomes_text(writer):
    response = httpx.Response(429, request=REQUEST)
    writer._client.messages.create.side_effect = APIStatusError(
        "rate limited", response=response, body={"error": "slow down"}
    )
    text = writer.generate(JOB, SAMPLE).text
    assert text.startswith("(Generation error 429)")
    assert "slow down" in text


def test_generate_connection_error_becomes_text(writer):
    writer._client.messages.create.side_effect = APIConnectionError(request=REQUEST)
    assert writer.generate(JOB, SAMPLE).text.startswith("(Generation request failed)")


def test_prompt_contains_sample_and_job():
    prompt = build_writer_prompt(JOB, SAMPLE)
    assert prompt.index(SAMPLE.content) < prompt.index(JOB)
