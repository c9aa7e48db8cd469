import json

import pytest
from fastapi.testclient import TestClient

from careerguide.core.catalog import CatalogStore
from careerguide.core.models import Career, Question
from careerguide.core.service import CareerGuidanceService

QUESTION_DATA = [
    {"id": "q1", "dimension": "EI", "sideA": "E", "sideB": "I", "interests": ["communication", "sales"]},
    {"id": "q2", "dimension": "EI", "sideA": "E", "sideB": "I", "interests": ["teamwork"]},
    {"id": "q3", "dimension": "SN", "sideA": "S", "sideB": "N", "interests": ["data"]},
    {"id": "q4", "dimension": "TF", "sideA": "T", "sideB": "F", "interests": ["python", "data"]},
    {"id": "q5", "dimension": "JP", "sideA": "J", "sideB": "P"},
]

CAREER_DATA = [
    {"id": "c1", "title": "Data Scientist", "category": "Technology", "skills": ["python", "data"], "personalities": ["INTJ"]},
    {"id": "c2", "title": "Sales Executive", "category": "Business", "skills": ["sales", "communication"], "personalities": ["ESTP"]},
    {"id": "c3", "title": "Counselor", "category": "Healthcare", "skills": ["empathy", "listening"], "personalities": ["INFJ"]},
    {"id": "c4", "title": "Data Analyst", "category": "Technology", "skills": ["data analysis", "sql"], "personalities": ["ISTJ"]},
    {"id": "c5", "title": "Teacher", "category": "Education", "skills": ["public speaking", "teamwork"], "personalities": []},
]

@pytest.fixture
def questions():
    return [Question(**q) for q in QUESTION_DATA]

@pytest.fixture
def careers():
    return [Career(**c) for c in CAREER_DATA]

@pytest.fixture
def catalog_files(tmp_path):
    questions_file = tmp_path / "questions.json"
    careers_file = tmp_path / "careers.json"
    questions_file.write_text(json.dumps({"questions": QUESTION_DATA}), encoding="utf-8")
    careers_file.write_text(json.dumps(CAREER_DATA), encoding="utf-8")
    return questions_file, careers_file

@pytest.fixture
def store(catalog_files):
    questions_file, careers_file = catalog_files
    return CatalogStore(str(questions_file), str(careers_file))

@pytest.fixture
def service(store):
    return CareerGuidanceService(store)

@pytest.fixture
def client(service):
    from careerguide.api.routes import get_service
    from careerguide.main import app

    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
