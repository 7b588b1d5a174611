import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
DEFAULT_PROPOSALS_PATH = DATA_DIR / "default_proposals.json"

# Server
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Corpus store
PROPOSAL_STORE_PATH = Path(os.getenv("PROPOSAL_STORE_PATH", str(DATA_DIR / "proposal_store.json")))
MIN_SAMPLE_PROPOSALS = int(os.getenv("MIN_SAMPLE_PROPOSALS", "3"))

# Ranking
MATCH_TOP_K = int(os.getenv("MATCH_TOP_K", "3"))
# Set to "english" to drop scikit-learn's English stop words before weighting
RANK_STOP_WORDS = os.getenv("RANK_STOP_WORDS") or None

# Generation: any Anthropic-compatible Messages endpoint
GENERATION_PROVIDER = os.getenv("GENERATION_PROVIDER", "anthropic")
GENERATION_API_KEY = os.getenv("GENERATION_API_KEY", "")
GENERATION_BASE_URL = os.getenv("GENERATION_BASE_URL") or None
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "claude-3-5-haiku-latest")
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "400"))
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.3"))
GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "60"))
