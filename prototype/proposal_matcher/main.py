"""FastAPI application: proposal upload, sample matching and generation."""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from proposal_matcher.config import BASE_DIR, LOG_LEVEL, MATCH_TOP_K, MIN_SAMPLE_PROPOSALS
from proposal_matcher.generation.writer import writer
from proposal_matcher.models import Candidate, Document
from proposal_matcher.ranking.ranker import select_best, select_top_k
from proposal_matcher.store.proposal_store import proposal_store

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Proposal store: {proposal_store.path}")
    if not writer.configured:
        logger.warning("GENERATION_API_KEY not set; generation will return placeholder text")
    logger.info("Proposal matcher ready")
    yield


app = FastAPI(title="Proposal Matcher", lifespan=lifespan)

FRONTEND_DIR = BASE_DIR.parent / "frontend"


# ── REST API ──────────────────────────────────────────────────────────

class ProposalIn(BaseModel):
    name: str = ""
    content: str = ""

class ProposalOut(BaseModel):
    name: str
    content: str

class GenerateRequest(BaseModel):
    job_description: str = ""

class GeneratedProposal(BaseModel):
    provider: str
    sample_index: int
    text: str
    score: float = 0.0
    error: Optional[str] = None

class GenerateResponse(BaseModel):
    matched_samples: List[ProposalOut]
    results: List[GeneratedProposal]
    best: GeneratedProposal
    alternatives: List[GeneratedProposal] = []
    latency_ms: int = 0


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "service": "proposal-matcher",
        "proposals": len(proposal_store.load()),
        "generation_configured": writer.configured,
    }


# Unprefixed paths stay registered for the original frontend
@app.get("/api/proposals", response_model=List[ProposalOut])
@app.get("/proposals", response_model=List[ProposalOut], include_in_schema=False)
def list_proposals():
    return [d.to_dict() for d in proposal_store.load()]


@app.post("/api/proposals")
@app.post("/proposals", include_in_schema=False)
def upload_proposal(req: ProposalIn):
    try:
        proposal_store.append(Document(name=req.name.strip(), content=req.content))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Proposal uploaded successfully."}


@app.post("/api/generate", response_model=GenerateResponse)
@app.post("/generate", response_model=GenerateResponse, include_in_schema=False)
async def generate(req: GenerateRequest):
    job_description = req.job_description.strip()
    if not job_description:
        raise HTTPException(status_code=400, detail="Job description is required.")

    proposals = proposal_store.load()
    if len(proposals) < MIN_SAMPLE_PROPOSALS:
        raise HTTPException(
            status_code=400,
            detail=f"At least {MIN_SAMPLE_PROPOSALS} sample proposals are required.",
        )

    start_time = time.time()
    samples = select_top_k(job_description, proposals, MATCH_TOP_K)
    logger.info(f"[Generate] Matched samples: {[s.name for s in samples]}")

    # One generation call per sample, in parallel
    loop = asyncio.get_event_loop()
    generations = await asyncio.gather(*[
        loop.run_in_executor(None, writer.generate, job_description, sample, i)
        for i, sample in enumerate(samples)
    ])

    candidates = [Candidate(text=g.text, label=f"sample-{g.sample_index}") for g in generations]
    best_of = select_best(job_description, candidates)

    results = [
        GeneratedProposal(
            provider=g.provider,
            sample_index=g.sample_index,
            text=g.text,
            score=round(s.score, 4),
            error=s.error,
        )
        for g, s in zip(generations, best_of.scores)
    ]
    best_index = best_of.winner_index

    latency = int((time.time() - start_time) * 1000)
    logger.info(f"[Generate] Best: sample #{best_index} score={best_of.winner.score:.3f} ({latency}ms)")

    return GenerateResponse(
        matched_samples=[s.to_dict() for s in samples],
        results=results,
        best=results[best_index],
        alternatives=[r for i, r in enumerate(results) if i != best_index],
        latency_ms=latency,
    )


# ── Browser noise ─────────────────────────────────────────────────────

@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=204)


@app.get("/.well-known/appspecific/com.chrome.devtools.json", include_in_schema=False)
def chrome_devtools():
    return Response(status_code=204)


# ── Static files (frontend) ──────────────────────────────────────────

if FRONTEND_DIR.exists():
    app.mount("/app", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="frontend")
