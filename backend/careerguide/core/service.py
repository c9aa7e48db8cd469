import logging
from typing import Any, Iterable, List, Optional, Tuple

from .catalog import CatalogStore
from .classifier import MISSING_DIMENSION, score_answers
from .models import AssessmentResult, Career, LikertScale, MatchWeights, Question
from .recommender import DEFAULT_LIMIT, recommend

logger = logging.getLogger(__name__)


class CareerGuidanceService:
    """
    Collaborator-facing entry points of the scoring and recommendation engine

    Every call works on a single catalog snapshot taken at its start.
    """

    def __init__(self, store: CatalogStore,
                 scale: Optional[LikertScale] = None,
                 weights: Optional[MatchWeights] = None,
                 sentinel: str = MISSING_DIMENSION,
                 default_limit: int = DEFAULT_LIMIT):
        self.store = store
        self.scale = scale or LikertScale()
        self.weights = weights or MatchWeights()
        self.sentinel = sentinel
        self.default_limit = default_limit

        logger.info(
            f"CareerGuidanceService initialized: likert {self.scale.min}-{self.scale.max}, "
            f"default limit {self.default_limit}"
        )

    def questions(self) -> Tuple[Question, ...]:
        return self.store.snapshot.questions

    def score(self, answers: Optional[Iterable[Any]]) -> AssessmentResult:
        """Score an answer set into a personality code and ranked interests"""
        snapshot = self.store.snapshot
        result = score_answers(answers, snapshot.questions, self.scale, self.sentinel)

        if result.missing_dimensions:
            logger.warning(
                f"Scored with missing dimension data: {result.missing_dimensions}"
            )
        logger.info(f"Scored assessment: {result.personality}, {len(result.interests)} interests")
        return result

    def recommend(self, personality: Optional[str],
                  interests: Optional[Iterable[Any]] = None,
                  limit: Optional[int] = None) -> List[Career]:
        """Recommend careers for a personality code, optionally refined by interests"""
        snapshot = self.store.snapshot
        limit = self.default_limit if limit is None else limit
        careers = recommend(snapshot.careers, personality, interests, limit, self.weights)

        logger.info(
            f"Recommended {len(careers)} careers for personality={personality!r}, "
            f"limit={limit}"
        )
        return careers

    def assess(self, answers: Optional[Iterable[Any]],
               limit: Optional[int] = None) -> Tuple[AssessmentResult, List[Career]]:
        """Score answers, then recommend careers for the resulting profile"""
        snapshot = self.store.snapshot
        limit = self.default_limit if limit is None else limit

        result = score_answers(answers, snapshot.questions, self.scale, self.sentinel)
        careers = recommend(
            snapshot.careers, result.personality, result.interests, limit, self.weights
        )

        logger.info(
            f"Assessment complete: {result.personality}, "
            f"{len(careers)} recommendations"
        )
        return result, careers

    def careers(self, search: Optional[str] = None,
                category: Optional[str] = None) -> List[Career]:
        """List catalog careers, optionally filtered by text search and category"""
        careers = list(self.store.snapshot.careers)

        if category:
            category_lower = category.strip().lower()
            careers = [c for c in careers if c.category.lower() == category_lower]

        if search:
            search_lower = search.strip().lower()
            careers = [
                c for c in careers
                if (search_lower in c.title.lower() or
                    search_lower in (c.description or "").lower() or
                    any(search_lower in skill.lower() for skill in c.skills))
            ]

        return careers

    def get_career(self, career_id: str) -> Optional[Career]:
        return self.store.snapshot.get_career(career_id)
