import os
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name, default="0"):
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///careerzoom.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # JSON API with bearer tokens; no cookie session to protect
    WTF_CSRF_ENABLED = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    RQ_QUEUE = os.getenv("RQ_QUEUE", "default")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    USE_MOCK_AI = _env_flag("USE_MOCK_AI")
    VENDOR_TIMEOUT = float(os.getenv("VENDOR_TIMEOUT", "30"))
    VENDOR_MAX_ATTEMPTS = int(os.getenv("VENDOR_MAX_ATTEMPTS", "3"))
    PLAN_MAX_RETRIES = int(os.getenv("PLAN_MAX_RETRIES", "3"))
    TOKEN_MAX_AGE = int(os.getenv("TOKEN_MAX_AGE", str(30 * 24 * 3600)))
    ANALYSIS_MIN_TRANSCRIPT_CHARS = int(os.getenv("ANALYSIS_MIN_TRANSCRIPT_CHARS", "100"))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    REDIS_URL = None
    OPENAI_API_KEY = None
    USE_MOCK_AI = True
    VENDOR_MAX_ATTEMPTS = 1
