import json

from careerguide.main import app


class TestAssessmentEndpoints:

    def test_list_questions(self, client):
        response = client.get("/api/v1/assessment/questions")

        assert response.status_code == 200
        questions = response.json()
        assert len(questions) == 5
        assert questions[0]["sideA"] == "E"
        assert questions[0]["dimension"] == "EI"

    def test_submit_assessment(self, client):
        response = client.post("/api/v1/assessment", json={
            "answers": [
                {"questionId": "q1", "answer": 1},
                {"questionId": "q3", "answer": "B"},
                {"questionId": "q4", "answer": "5"},
                {"questionId": "missing", "answer": 5},
            ]
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["result"]["personality"] == "INTJ"
        assert body["result"]["dimension_scores"]["EI"] == -2
        assert body["recommendations"][0]["id"] == "c1"
        assert len(body["recommendations"]) == 5

    def test_non_list_answers_scored_as_empty(self, client):
        response = client.post("/api/v1/assessment", json={"answers": "nope"})

        assert response.status_code == 200
        assert response.json()["result"]["personality"] == "ESTJ"

    def test_empty_body(self, client):
        response = client.post("/api/v1/assessment", json={})

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_limit(self, client):
        response = client.post("/api/v1/assessment", json={"answers": [], "limit": 2})

        assert len(response.json()["recommendations"]) == 2

    def test_invalid_limit(self, client):
        response = client.post("/api/v1/assessment", json={"answers": [], "limit": 0})

        assert response.status_code == 422

    def test_score_only(self, client):
        response = client.post("/api/v1/assessment/score", json={
            "answers": [{"questionId": "q2", "answer": "I"}]
        })

        assert response.status_code == 200
        body = response.json()
        assert body["personality"] == "ISTJ"
        assert body["interests"] == ["teamwork"]
        assert body["missing_dimensions"] == []


class TestRecommendationEndpoints:

    def test_personality_only(self, client):
        response = client.post("/api/v1/recommendations", json={"personality": "infj"})

        assert response.status_code == 200
        body = response.json()
        assert body["personality"] == "INFJ"
        assert body["recommendations"][0]["id"] == "c3"
        assert len(body["recommendations"]) == 5

    def test_with_interests_and_limit(self, client):
        response = client.post("/api/v1/recommendations", json={
            "personality": "INTJ", "interests": ["Python"], "limit": 1
        })

        recommendations = response.json()["recommendations"]
        assert [c["id"] for c in recommendations] == ["c1"]

    def test_missing_personality(self, client):
        response = client.post("/api/v1/recommendations", json={"limit": 3})

        ids = [c["id"] for c in response.json()["recommendations"]]
        assert ids == ["c1", "c2", "c3"]

    def test_limit_is_capped(self, client):
        response = client.post("/api/v1/recommendations", json={"limit": 1000})

        assert response.status_code == 200
        assert len(response.json()["recommendations"]) == 5


class TestCareerEndpoints:

    def test_list_careers(self, client):
        body = client.get("/api/v1/careers").json()

        assert body["total"] == 5
        assert body["search_applied"] is False

    def test_search_careers(self, client):
        body = client.get("/api/v1/careers", params={"search": "data"}).json()

        assert [c["id"] for c in body["careers"]] == ["c1", "c4"]

    def test_career_details(self, client):
        response = client.get("/api/v1/careers/c2")

        assert response.status_code == 200
        assert response.json()["title"] == "Sales Executive"

    def test_unknown_career(self, client):
        assert client.get("/api/v1/careers/unknown").status_code == 404


class TestMonitoringEndpoints:

    def test_health(self, client):
        response = client.get("/api/v1/health")

        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["questions_loaded"] == 5
        assert body["components"]["missing_dimensions"] == []
        assert "x-request-id" in response.headers

    def test_tracking_headers(self, client):
        response = client.get("/api/v1/assessment/questions")

        assert len(response.headers["x-request-id"]) == 8
        assert response.headers["x-response-time"].endswith("s")

    def test_caller_request_id_is_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "host-42_a"})

        assert response.headers["x-request-id"] == "host-42_a"

    def test_malformed_request_id_is_replaced(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "bad id <script>"})

        assert response.headers["x-request-id"] != "bad id <script>"
        assert len(response.headers["x-request-id"]) == 8

    def test_reload_reports_degraded_catalog(self, client, catalog_files):
        questions_file, _ = catalog_files
        questions_file.write_text(json.dumps([
            {"id": "q1", "dimension": "EI", "sideA": "E", "sideB": "I"},
        ]), encoding="utf-8")

        response = client.post("/api/v1/admin/catalog/reload")

        assert response.status_code == 200
        assert response.json()["questions_loaded"] == 1

        health = client.get("/api/v1/health").json()
        assert health["status"] == "degraded"
        assert health["components"]["missing_dimensions"] == ["SN", "TF", "JP"]

        score = client.post("/api/v1/assessment/score", json={"answers": []}).json()
        assert score["personality"] == "EXXX"

    def test_reload_failure(self, client, catalog_files):
        _, careers_file = catalog_files
        assert client.get("/api/v1/careers").json()["total"] == 5
        careers_file.write_text("oops", encoding="utf-8")

        response = client.post("/api/v1/admin/catalog/reload")

        assert response.status_code == 503
        assert client.get("/api/v1/careers").json()["total"] == 5

    def test_root(self, client):
        body = client.get("/").json()

        assert body["service"] == "Career Guidance Engine"
        assert body["version"] == app.version
