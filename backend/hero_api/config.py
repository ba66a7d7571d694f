import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./heroes.db")

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_TIMEOUT_SECONDS = float(os.getenv("OLLAMA_TIMEOUT_SECONDS", "120"))

DEFAULT_BASE_MODEL = os.getenv("DEFAULT_BASE_MODEL", "llama3.2:latest")
DEFAULT_SYSTEM_PROMPT_TEMPLATE = os.getenv(
    "DEFAULT_SYSTEM_PROMPT_TEMPLATE", "You are {name}, {description}"
)
DEFAULT_HERO_DESCRIPTION = os.getenv(
    "DEFAULT_HERO_DESCRIPTION", "a helpful AI assistant."
)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:3001"
    ).split(",")
    if origin.strip()
]

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
