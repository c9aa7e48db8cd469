from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings

from .core.models import LikertScale, MatchWeights

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

class Settings(BaseSettings):
    """Application configuration with environment variable support"""

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    RELOAD: bool = False
    LOG_LEVEL: str = "INFO"

    # Catalog files (shipped with the package, overridable per deployment)
    QUESTIONS_FILE: str = str(DATA_DIR / "assessment_questions.json")
    CAREERS_FILE: str = str(DATA_DIR / "careers.json")

    # Assessment scoring
    LIKERT_MIN: int = 1
    LIKERT_MAX: int = 5
    MISSING_DIMENSION_SENTINEL: str = "X"

    # Recommendation settings
    DEFAULT_RECOMMENDATION_LIMIT: int = 5
    MAX_RECOMMENDATION_LIMIT: int = 50
    PERSONALITY_MATCH_POINTS: int = 5
    EXACT_SKILL_POINTS: int = 3
    PARTIAL_SKILL_POINTS: int = 1

    # CORS settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def likert_scale(self) -> LikertScale:
        return LikertScale(min=self.LIKERT_MIN, max=self.LIKERT_MAX)

    def match_weights(self) -> MatchWeights:
        return MatchWeights(
            personality=self.PERSONALITY_MATCH_POINTS,
            exact_skill=self.EXACT_SKILL_POINTS,
            partial_skill=self.PARTIAL_SKILL_POINTS,
        )

settings = Settings()
