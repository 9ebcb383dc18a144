import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))

# SQLite database (users, drafts, posts, ratings)
SQLITE_DB_PATH = Path(os.getenv("SQLITE_DB_PATH", str(DATA_DIR / "blogstudio.db")))

# Auth settings
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 7)))  # 1 week

# LLM settings - Groq chat completions
# Get your free API key at https://console.groq.com
GROQ_API_KEY = os.getenv("GROQ_API_KEY", "")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")

# Article generation
GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "4000"))
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
SUMMARY_MAX_TOKENS = int(os.getenv("SUMMARY_MAX_TOKENS", "150"))
SUMMARY_TEMPERATURE = float(os.getenv("SUMMARY_TEMPERATURE", "0.3"))

# Summary stored with a post published straight from a draft
PUBLISH_SUMMARY_CHARS = 150

# Frontend + logging
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Prompt templates
GENERATION_SYSTEM_PROMPT = (
    "You are a professional content writer who creates engaging, informative blog posts. "
    "Always respond with properly formatted HTML content."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are a content summarizer. Create a brief 2-3 sentence summary of the given content."
)
