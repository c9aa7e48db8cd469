import json
import logging
import os
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, Field, ValidationError

from .models import Career, DIMENSION_ORDER, Question

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

class CatalogError(RuntimeError):
    """Catalog file exists but cannot be turned into questions or careers"""

class CatalogSnapshot(BaseModel):
    """Immutable view of both catalogs, handed to each scoring call"""
    questions: Tuple[Question, ...] = ()
    careers: Tuple[Career, ...] = ()
    loaded_at: datetime = Field(default_factory=datetime.now)

    class Config:
        frozen = True

    def get_career(self, career_id: str) -> Optional[Career]:
        for career in self.careers:
            if career.id == career_id:
                return career
        return None

    def missing_dimensions(self) -> List[str]:
        covered = {question.dimension for question in self.questions}
        return [d.value for d in DIMENSION_ORDER if d not in covered]

def _read_entries(file_path: str, key: str) -> List[Dict[str, Any]]:
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Catalog file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"{file_path} is not valid JSON: {e}") from e

    # Accept a bare list or {"<key>": [...]}
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise CatalogError(f"{file_path} must contain a list of {key}")
    return data

def _parse_entries(entries: List[Dict[str, Any]], model: Type[ModelT], file_path: str) -> List[ModelT]:
    parsed = []
    for index, entry in enumerate(entries):
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError as e:
            raise CatalogError(f"{file_path} entry {index} is invalid: {e}") from e
    return parsed

def load_questions(file_path: str) -> List[Question]:
    try:
        questions = _parse_entries(_read_entries(file_path, "questions"), Question, file_path)
        logger.info(f"Successfully loaded {len(questions)} assessment questions")
        return questions

    except Exception as e:
        logger.error(f"Failed to load questions: {e}")
        raise

def load_careers(file_path: str) -> List[Career]:
    try:
        careers = _parse_entries(_read_entries(file_path, "careers"), Career, file_path)
        logger.info(f"Successfully loaded {len(careers)} careers")
        return careers

    except Exception as e:
        logger.error(f"Failed to load careers: {e}")
        raise

def validate_catalog(questions: List[Question], careers: List[Career]) -> Tuple[bool, List[str]]:
    """
    Check catalog structure the scoring engine relies on

    Problems are reported, not raised: a dimension without questions still
    scores (as the sentinel letter) so callers can show a result.
    """
    errors = []

    seen_questions = set()
    for question in questions:
        if question.id in seen_questions:
            errors.append(f"Duplicate question id: {question.id}")
        seen_questions.add(question.id)

    for dimension in DIMENSION_ORDER:
        members = [q for q in questions if q.dimension == dimension]
        if not members:
            errors.append(f"Dimension {dimension.value} has no questions")
            continue

        # Every question is scored against the first question's poles
        reference = members[0]
        for question in members[1:]:
            if (question.side_a.upper(), question.side_b.upper()) != (
                reference.side_a.upper(), reference.side_b.upper()
            ):
                errors.append(
                    f"Question {question.id} poles {question.side_a}/{question.side_b} "
                    f"differ from {dimension.value} poles {reference.side_a}/{reference.side_b}"
                )

    seen_careers = set()
    for career in careers:
        if career.id in seen_careers:
            errors.append(f"Duplicate career id: {career.id}")
        seen_careers.add(career.id)

    is_valid = len(errors) == 0
    if is_valid:
        logger.info("Catalog validation passed")
    else:
        logger.warning(f"Catalog validation failed with {len(errors)} errors")
        for error in errors:
            logger.warning(f"  {error}")

    return is_valid, errors

class CatalogStore:
    """
    Holds the current catalog snapshot and swaps it atomically on reload

    Callers read `snapshot` once per operation; a reload never mutates a
    snapshot that is already in use.
    """

    def __init__(self, questions_file: str, careers_file: str):
        self.questions_file = questions_file
        self.careers_file = careers_file
        self.issues: List[str] = []
        self._snapshot: Optional[CatalogSnapshot] = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> CatalogSnapshot:
        if self._snapshot is None:
            return self.load()
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def load(self) -> CatalogSnapshot:
        """Read both catalog files and install them as the current snapshot"""
        questions = load_questions(self.questions_file)
        careers = load_careers(self.careers_file)
        _, issues = validate_catalog(questions, careers)

        snapshot = CatalogSnapshot(questions=tuple(questions), careers=tuple(careers))
        with self._lock:
            self._snapshot = snapshot
            self.issues = issues

        logger.info(
            f"Catalog loaded: {len(snapshot.questions)} questions, "
            f"{len(snapshot.careers)} careers"
        )
        return snapshot

    def reload(self) -> CatalogSnapshot:
        """Reload from disk, keeping the previous snapshot if loading fails"""
        previous = self._snapshot
        try:
            return self.load()
        except Exception:
            if previous is not None:
                logger.warning("Catalog reload failed, keeping previous snapshot")
            raise
