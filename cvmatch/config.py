import os
from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

OLLAMA = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
LLM_MODEL = os.getenv("LLM_MODEL", "llama3")
LLM_TIMEOUT = int(os.getenv("LLM_TIMEOUT", "30"))

NLP_ENABLED = os.getenv("NLP_ENABLED", "true").lower() in ("1", "true", "yes")
SPACY_MODEL = os.getenv("SPACY_MODEL", "en_core_web_sm")

SCORING_MAX_WORKERS = int(os.getenv("SCORING_MAX_WORKERS", "4"))
