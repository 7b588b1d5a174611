import uvicorn

from proposal_matcher.config import LOG_LEVEL, PORT

if __name__ == "__main__":
    uvicorn.run("proposal_matcher.main:app", host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())
