"""Prompt text for proposal generation."""
from __future__ import annotations

from proposal_matcher.models import Document

WRITER_SYSTEM_PROMPT = (
    "You write freelance job proposals. Study the structure and style of the sample "
    "proposal first, then write a new proposal that follows the same patterns. "
    "Use US English spelling, grammar, and conventions only."
)

WRITER_USER_PROMPT = """Read the sample proposal below before writing anything. You may merge ideas from it into a stronger proposal, but keep its shape.

## Step 1: Analyze the sample
- Paragraph count, headings, and bullets (if any)
- Greeting and sign-off style, or their absence
- Sentence length and tone (confident, technical, conversational)
- Overall word count

## Step 2: Write the proposal
- Same number of paragraphs, headings in the same order, bullets in the same sections
- Same greeting and sign-off style
- Similar sentence length, tone, and voice
- Roughly 180-250 words
- New content written for this job; do not copy sentences from the sample

## Language
- US English spelling and grammar only ("color", "organize", "center")
- US conventions: periods inside quotes, MM/DD/YYYY dates

SAMPLE PROPOSAL:
---
{sample}
---

JOB DESCRIPTION:
---
{job_description}
---

Output only the final proposal text, with no analysis."""


def build_writer_prompt(job_description: str, sample: Document) -> str:
    return WRITER_USER_PROMPT.format(sample=sample.content, job_description=job_description)
