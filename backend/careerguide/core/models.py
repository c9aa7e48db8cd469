from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

class Dimension(str, Enum):
    """The four independent personality axes"""
    EI = "EI"
    SN = "SN"
    TF = "TF"
    JP = "JP"

# Fixed order of letters in a personality code
DIMENSION_ORDER = [Dimension.EI, Dimension.SN, Dimension.TF, Dimension.JP]

def _clean_tags(value: Any) -> List[str]:
    """Coerce a tag list from catalog data: drop blanks and repeats, keep order"""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    tags: List[str] = []
    for tag in value:
        if tag is None:
            continue
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags

class Question(BaseModel):
    """Forced-choice assessment question measuring one dimension"""
    id: str
    text: str = ""
    dimension: Dimension
    side_a: str = Field(..., alias="sideA", description="Pole favoured by positive answers")
    side_b: str = Field(..., alias="sideB", description="Pole favoured by negative answers")
    interests: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("dimension", mode="before")
    @classmethod
    def _normalize_dimension(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("side_a", "side_b")
    @classmethod
    def _strip_pole(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("pole label must not be empty")
        return value

    @field_validator("interests", mode="before")
    @classmethod
    def _clean_interests(cls, value: Any) -> List[str]:
        return _clean_tags(value)

    @model_validator(mode="after")
    def _check_distinct_poles(self) -> "Question":
        if self.side_a.upper() == self.side_b.upper():
            raise ValueError(f"Question {self.id} has identical poles: {self.side_a!r}")
        return self

class Answer(BaseModel):
    """A single submitted answer; the value is untrusted and may be anything"""
    question_id: Optional[str] = Field(None, alias="questionId")
    answer: Any = None

    class Config:
        populate_by_name = True

class Career(BaseModel):
    """Career catalog entry"""
    id: str
    title: str
    category: str = ""
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    personalities: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @field_validator("skills", "personalities", mode="before")
    @classmethod
    def _clean_lists(cls, value: Any) -> List[str]:
        return _clean_tags(value)

class ScoredCareer(BaseModel):
    """Career paired with its match score for one recommendation call"""
    career: Career
    score: int

class LikertScale(BaseModel):
    """Bounds of numeric answers; the midpoint is neutral"""
    min: int = 1
    max: int = 5

    @model_validator(mode="after")
    def _check_bounds(self) -> "LikertScale":
        if self.max <= self.min:
            raise ValueError(f"Likert max ({self.max}) must exceed min ({self.min})")
        if (self.max - self.min) % 2:
            raise ValueError(f"Likert range {self.min}-{self.max} has no integer midpoint")
        return self

    @property
    def neutral(self) -> int:
        return (self.min + self.max) // 2

    @property
    def bound(self) -> int:
        """Largest magnitude a signed answer value can take"""
        return self.max - self.neutral

class MatchWeights(BaseModel):
    """Points awarded by the recommendation matcher"""
    personality: int = Field(5, ge=0)
    exact_skill: int = Field(3, ge=0)
    partial_skill: int = Field(1, ge=0)

class AssessmentResult(BaseModel):
    """Outcome of scoring one answer set"""
    personality: str
    dimension_scores: Dict[str, int]
    interests: List[str]
    interest_weights: Dict[str, int] = Field(default_factory=dict)
    poles: Dict[str, str] = Field(default_factory=dict)
    missing_dimensions: List[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """False when the catalog lacked questions for some dimension"""
        return not self.missing_dimensions

# API Request Models
class AssessmentRequest(BaseModel):
    """Assessment submission; anything but a list of answers is scored as empty"""
    answers: Any = None
    limit: Optional[int] = Field(None, ge=1)

class ScoreRequest(BaseModel):
    """Assessment submission without recommendations"""
    answers: Any = None

class RecommendationRequest(BaseModel):
    """Standalone recommendation query"""
    personality: Optional[str] = ""
    interests: Optional[List[Any]] = None
    limit: Optional[int] = Field(None, ge=1)
