import os

# Redis
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", 0))

# Working documents expire after a day of inactivity
WORKSPACE_TTL_SECONDS = int(os.getenv("WORKSPACE_TTL_SECONDS", 60 * 60 * 24))

# Remote schedule service
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "openai/gpt-oss-20b")
AI_TEMPERATURE = float(os.getenv("AI_TEMPERATURE", 0.2))
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", 90))

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Quick draft window used when a working day has no timing of its own
DEFAULT_DAY_START = os.getenv("DEFAULT_DAY_START", "08:00")
DEFAULT_DAY_END = os.getenv("DEFAULT_DAY_END", "14:45")
