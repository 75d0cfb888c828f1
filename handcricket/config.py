"""
Application configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Settings from environment variables"""

    # Persistence
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "hand_cricket.db")

    # Gemini commentary
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", os.getenv("REACT_APP_GEMINI_API_KEY", ""))
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    COMMENTARY_TIMEOUT: float = float(os.getenv("COMMENTARY_TIMEOUT", "10"))

    # Reveal delays (seconds) before a client accepts the next ball
    DISMISSAL_DELAY: float = 1.2
    RUNS_DELAY: float = 0.25

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")


settings = Settings()
