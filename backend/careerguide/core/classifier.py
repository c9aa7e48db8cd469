import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .models import (
    Answer, AssessmentResult, Dimension, DIMENSION_ORDER, LikertScale, Question
)

MISSING_DIMENSION = "X"
POLE_A_TOKEN = "A"
POLE_B_TOKEN = "B"

# Leading signed integer, the rest of the token is ignored
INTEGER_PREFIX = re.compile(r"[+-]?[0-9]+")

def coerce_answer(raw: Any) -> Optional[Answer]:
    """Turn a submitted answer into an Answer, or None if it has no question id"""
    if isinstance(raw, Answer):
        return raw if raw.question_id is not None else None
    if not isinstance(raw, Mapping):
        return None

    question_id = raw.get("questionId", raw.get("question_id"))
    if question_id is None:
        return None
    return Answer(question_id=str(question_id), answer=raw.get("answer"))

def likert_to_signed(value: float, scale: LikertScale) -> int:
    """
    Clamp a numeric answer to the scale, round half up and center it on neutral

    With the default 1-5 scale the result lies in [-2, +2].
    """
    if isinstance(value, float) and math.isnan(value):
        return 0
    clamped = min(max(value, scale.min), scale.max)
    return int(math.floor(clamped + 0.5)) - scale.neutral

def signed_value(question: Question, value: Any, scale: LikertScale) -> int:
    """
    Signed contribution of one answer: positive favors sideA, negative sideB

    Strings match "A"/"B" or the question's own pole labels, case-insensitively,
    before their leading integer is read. Anything unrecognised contributes 0.
    """
    # bool is an int subclass but never a Likert value
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        return likert_to_signed(value, scale)

    if isinstance(value, str):
        token = value.strip().upper()
        if not token:
            return 0
        if token == POLE_A_TOKEN or token == question.side_a.upper():
            return 1
        if token == POLE_B_TOKEN or token == question.side_b.upper():
            return -1
        match = INTEGER_PREFIX.match(token)
        if match is None:
            return 0
        return likert_to_signed(int(match.group()), scale)

    return 0

def pole_letter(pole: str) -> str:
    """Code letter for a pole label: its upper-cased initial"""
    # upper() can expand one character into several, e.g. "ß" -> "SS"
    return pole.upper()[0]

def score_answers(
    answers: Optional[Iterable[Any]],
    questions: Iterable[Question],
    scale: Optional[LikertScale] = None,
    sentinel: str = MISSING_DIMENSION,
) -> AssessmentResult:
    """
    Score an answer set against the question catalog

    Args:
        answers: Answers or answer mappings; unknown or malformed entries are skipped
        questions: Question catalog, scanned once per call
        scale: Likert bounds for numeric answers (default 1-5)
        sentinel: Letter used for a dimension without any catalog question

    Returns:
        AssessmentResult with a 4-letter code, per-dimension scores and ranked interests
    """
    scale = scale or LikertScale()

    by_id: Dict[str, Question] = {}
    first_by_dimension: Dict[Dimension, Question] = {}
    interest_rank: Dict[str, int] = {}
    for question in questions:
        by_id.setdefault(question.id, question)
        first_by_dimension.setdefault(question.dimension, question)
        for tag in question.interests:
            interest_rank.setdefault(tag, len(interest_rank))

    dimension_scores = {dimension.value: 0 for dimension in DIMENSION_ORDER}
    interest_weights: Dict[str, int] = {}

    for raw in answers or ():
        answer = coerce_answer(raw)
        if answer is None:
            continue
        question = by_id.get(answer.question_id)
        if question is None:
            continue

        value = signed_value(question, answer.answer, scale)
        dimension_scores[question.dimension.value] += value

        if value:
            for tag in question.interests:
                interest_weights[tag] = interest_weights.get(tag, 0) + abs(value)

    letters: List[str] = []
    poles: Dict[str, str] = {}
    missing: List[str] = []
    for dimension in DIMENSION_ORDER:
        reference = first_by_dimension.get(dimension)
        if reference is None:
            missing.append(dimension.value)
            letters.append(sentinel)
            continue

        # Ties, including unanswered dimensions, go to sideA
        if dimension_scores[dimension.value] >= 0:
            pole = reference.side_a
        else:
            pole = reference.side_b
        poles[dimension.value] = pole
        letters.append(pole_letter(pole))

    interests = sorted(
        interest_weights,
        key=lambda tag: (-interest_weights[tag], interest_rank[tag])
    )

    return AssessmentResult(
        personality="".join(letters),
        dimension_scores=dimension_scores,
        interests=interests,
        interest_weights={tag: interest_weights[tag] for tag in interests},
        poles=poles,
        missing_dimensions=missing,
    )
