from fastapi import APIRouter, HTTPException, Query, Depends
from fastapi.responses import JSONResponse
from typing import Any, List, Optional
import logging
from datetime import datetime

from ..core.catalog import CatalogError, CatalogStore
from ..core.models import AssessmentRequest, RecommendationRequest, ScoreRequest
from ..core.service import CareerGuidanceService
from ..config import settings

logger = logging.getLogger(__name__)

# Initialize global instances
catalog_store = CatalogStore(settings.QUESTIONS_FILE, settings.CAREERS_FILE)
guidance_service = CareerGuidanceService(
    catalog_store,
    scale=settings.likert_scale(),
    weights=settings.match_weights(),
    sentinel=settings.MISSING_DIMENSION_SENTINEL,
    default_limit=settings.DEFAULT_RECOMMENDATION_LIMIT,
)

router = APIRouter()

def get_service() -> CareerGuidanceService:
    return guidance_service

def _answer_list(answers: Any) -> List[Any]:
    return answers if isinstance(answers, list) else []

def _capped_limit(limit: Optional[int]) -> Optional[int]:
    if limit is None:
        return None
    return min(limit, settings.MAX_RECOMMENDATION_LIMIT)

def _catalog_unavailable(e: Exception) -> HTTPException:
    logger.error(f"Catalog unavailable: {e}")
    return HTTPException(status_code=503, detail=f"Catalog unavailable: {str(e)}")

# ASSESSMENT ENDPOINTS

@router.get("/assessment/questions")
async def list_questions(service: CareerGuidanceService = Depends(get_service)):
    """Get the assessment question catalog"""
    try:
        questions = service.questions()
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    return [q.model_dump(mode="json", by_alias=True) for q in questions]

@router.post("/assessment")
async def submit_assessment(request: AssessmentRequest,
                            service: CareerGuidanceService = Depends(get_service)):
    """Score an assessment and recommend careers for the resulting profile"""
    try:
        result, careers = service.assess(
            _answer_list(request.answers), _capped_limit(request.limit)
        )
        return {
            "success": True,
            "result": result.model_dump(),
            "recommendations": [c.model_dump() for c in careers],
        }

    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)
    except Exception as e:
        logger.error(f"Failed to process assessment: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

@router.post("/assessment/score")
async def score_assessment(request: ScoreRequest,
                           service: CareerGuidanceService = Depends(get_service)):
    """Score an assessment without recommending careers"""
    try:
        result = service.score(_answer_list(request.answers))
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    return result.model_dump()

# RECOMMENDATION ENDPOINTS

@router.post("/recommendations")
async def get_recommendations(request: RecommendationRequest,
                              service: CareerGuidanceService = Depends(get_service)):
    """Recommend careers for a personality code and optional interests"""
    try:
        careers = service.recommend(
            request.personality, request.interests, _capped_limit(request.limit)
        )
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    return {
        "recommendations": [c.model_dump() for c in careers],
        "personality": (request.personality or "").strip().upper(),
        "interests": request.interests or [],
    }

# CAREER ENDPOINTS

@router.get("/careers")
async def list_careers(
    search: Optional[str] = Query(None, description="Search title, description or skills"),
    category: Optional[str] = Query(None, description="Filter by category"),
    service: CareerGuidanceService = Depends(get_service)
):
    """Get list of catalog careers with optional filtering"""
    try:
        careers = service.careers(search=search, category=category)
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    logger.info(f"Listed {len(careers)} careers, search='{search}', category='{category}'")
    return {
        "careers": [c.model_dump() for c in careers],
        "total": len(careers),
        "search_applied": search is not None,
    }

@router.get("/careers/{career_id}")
async def get_career_details(career_id: str,
                             service: CareerGuidanceService = Depends(get_service)):
    """Get a single career entry"""
    try:
        career = service.get_career(career_id)
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    if not career:
        raise HTTPException(status_code=404, detail="Career not found")
    return career.model_dump()

# MONITORING ENDPOINTS

@router.get("/health")
async def health_check(service: CareerGuidanceService = Depends(get_service)):
    """Catalog health: counts, dimension coverage and validation issues"""
    try:
        snapshot = service.store.snapshot
    except (CatalogError, FileNotFoundError) as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(status_code=503, content={
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        })

    missing = snapshot.missing_dimensions()
    if not snapshot.questions or not snapshot.careers:
        status = "unhealthy"
    elif missing or service.store.issues:
        status = "degraded"
    else:
        status = "healthy"

    return {
        "status": status,
        "timestamp": datetime.now().isoformat(),
        "service": "Career Guidance Engine",
        "components": {
            "questions_loaded": len(snapshot.questions),
            "careers_loaded": len(snapshot.careers),
            "missing_dimensions": missing,
            "catalog_loaded_at": snapshot.loaded_at.isoformat(),
        },
        "issues": service.store.issues,
        "configuration": {
            "likert_scale": [service.scale.min, service.scale.max],
            "default_limit": service.default_limit,
            "max_limit": settings.MAX_RECOMMENDATION_LIMIT,
        }
    }

@router.post("/admin/catalog/reload")
async def reload_catalog(service: CareerGuidanceService = Depends(get_service)):
    """Reload question and career catalogs from disk (admin endpoint)"""
    try:
        snapshot = service.store.reload()
    except (CatalogError, FileNotFoundError) as e:
        raise _catalog_unavailable(e)

    logger.info("Catalog reloaded via admin endpoint")
    return {
        "questions_loaded": len(snapshot.questions),
        "careers_loaded": len(snapshot.careers),
        "issues": service.store.issues,
        "timestamp": datetime.now().isoformat()
    }
