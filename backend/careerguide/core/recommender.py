from typing import Any, Iterable, List, Optional, Sequence, Set

from .models import Career, MatchWeights, ScoredCareer

DEFAULT_LIMIT = 5

def normalize_personality(personality: Optional[str]) -> str:
    return (personality or "").strip().upper()

def normalize_tags(tags: Optional[Iterable[Any]]) -> List[str]:
    """Lower-case, stripped tags; blanks are dropped since "" is a substring of everything"""
    normalized = []
    for tag in tags or ():
        if tag is None:
            continue
        tag = str(tag).strip().lower()
        if tag:
            normalized.append(tag)
    return normalized

def _score(career: Career, code: str, interests: Sequence[str], weights: MatchWeights) -> int:
    score = 0

    if code and career.personalities:
        if code in {p.upper() for p in career.personalities}:
            score += weights.personality

    skills = normalize_tags(career.skills)
    for interest in interests:
        for skill in skills:
            if skill == interest:
                score += weights.exact_skill
            elif interest in skill or skill in interest:
                score += weights.partial_skill

    return score

def score_career(
    career: Career,
    personality: Optional[str] = "",
    interests: Optional[Iterable[Any]] = None,
    weights: Optional[MatchWeights] = None,
) -> int:
    """Match score of a single career for a personality code and interest tags"""
    return _score(
        career,
        normalize_personality(personality),
        normalize_tags(interests),
        weights or MatchWeights(),
    )

def rank_careers(
    careers: Iterable[Career],
    personality: Optional[str] = "",
    interests: Optional[Iterable[Any]] = None,
    weights: Optional[MatchWeights] = None,
) -> List[ScoredCareer]:
    """Score every career; highest first, catalog order kept among equal scores"""
    code = normalize_personality(personality)
    tags = normalize_tags(interests)
    weights = weights or MatchWeights()

    scored = [
        ScoredCareer(career=career, score=_score(career, code, tags, weights))
        for career in careers
    ]
    # list.sort is stable
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored

def recommend(
    careers: Iterable[Career],
    personality: Optional[str] = "",
    interests: Optional[Iterable[Any]] = None,
    limit: int = DEFAULT_LIMIT,
    weights: Optional[MatchWeights] = None,
) -> List[Career]:
    """
    Recommend up to `limit` careers for a personality code and interest tags

    Careers with a positive score come first. When there are fewer than `limit`
    of them the remaining slots are filled from the full ranking, so a non-empty
    catalog always yields min(limit, catalog size) distinct careers.

    Args:
        careers: Career catalog snapshot
        personality: Four-letter code; empty means no personality preference
        interests: Interest tags matched against career skills; may be empty
        limit: Maximum number of careers returned
        weights: Points for personality, exact and partial skill matches

    Returns:
        Careers in recommendation order, no id repeated
    """
    if limit < 1:
        return []

    ranked = rank_careers(careers, personality, interests, weights)
    best = _unique([item.career for item in ranked if item.score > 0], limit)
    if len(best) >= limit:
        return best

    # Fallback pool: the whole ranking, zero scores included
    return _unique(best + [item.career for item in ranked], limit)

def _unique(careers: Iterable[Career], limit: int) -> List[Career]:
    seen: Set[str] = set()
    selected: List[Career] = []
    for career in careers:
        if career.id in seen:
            continue
        seen.add(career.id)
        selected.append(career)
        if len(selected) >= limit:
            break
    return selected
