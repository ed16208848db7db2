"""Integration tests for the API endpoints."""

import inspect

import pytest
from fastapi.testclient import TestClient

from subject_image_index.api import records as records_api
from subject_image_index.engine_instance import search_engine
from subject_image_index.main import app


class TestAPI:
    """Integration tests for API endpoints."""

    @pytest.fixture
    def client(self):
        """Create a test client over an empty engine."""
        search_engine.clear()
        yield TestClient(app)
        search_engine.clear()

    @pytest.fixture
    def sample_records(self):
        """Sample records for testing."""
        return [
            {"id": 1, "name": "Jack", "image_id": "img_040.jpg"},
            {"id": 2, "name": "Jackie", "image_id": "img_041.jpg"},
            {"id": 3, "name": "Anne", "image_id": "img_042.jpg"},
        ]

    @pytest.fixture
    def loaded_client(self, client, sample_records):
        response = client.post("/api/v1/records", json={"records": sample_records})
        assert response.status_code == 200
        return client

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Subject Image Index"
        assert data["status"] == "running"

    def test_api_info_endpoint(self, client):
        response = client.get("/api")
        assert response.status_code == 200

        data = response.json()
        assert "endpoints" in data
        assert data["limits"]["max_edit_distance"] == 1

    def test_load_records(self, client, sample_records):
        response = client.post("/api/v1/records", json={"records": sample_records})
        assert response.status_code == 200

        data = response.json()
        assert data["total_records"] == 3
        assert data["indexed_records"] == 3
        assert data["total_tokens"] == 3

    def test_load_empty_records(self, client):
        response = client.post("/api/v1/records", json={"records": []})
        assert response.status_code == 422

    def test_rejected_load_keeps_dataset(self, loaded_client):
        """A malformed load is rejected and the old dataset still answers."""
        response = loaded_client.post(
            "/api/v1/records",
            json={"records": [{"id": 9, "image_id": "img_999.jpg"}]}
        )
        assert response.status_code == 422
        assert "name" in response.json()["detail"]

        response = loaded_client.get("/api/v1/search/jack")
        assert response.json()["total_results"] == 2

    def test_duplicate_ids_rejected(self, client):
        response = client.post("/api/v1/records", json={"records": [
            {"id": 1, "name": "Jack", "image_id": "a.jpg"},
            {"id": 1, "name": "Anne", "image_id": "b.jpg"},
        ]})
        assert response.status_code == 422

    def test_search_before_load(self, client):
        response = client.get("/api/v1/search/jack")
        assert response.status_code == 409

    def test_search_prefix(self, loaded_client):
        """Test prefix search functionality."""
        response = loaded_client.get("/api/v1/search/Jack")
        assert response.status_code == 200

        data = response.json()
        assert data["query"] == "Jack"
        assert data["limit"] == 10
        assert data["total_results"] == 2
        assert data["prefix_matches"] == 2
        assert data["fuzzy_matches"] == 0
        assert [hit["record"]["id"] for hit in data["results"]] == [1, 2]

    def test_search_fuzzy(self, loaded_client):
        """Test typo-tolerant search functionality."""
        response = loaded_client.get("/api/v1/search/Jsck", params={"limit": 1})
        assert response.status_code == 200

        data = response.json()
        assert data["total_results"] == 1
        hit = data["results"][0]
        assert hit["record"] == {"id": 1, "name": "Jack", "image_id": "img_040.jpg"}
        assert hit["match_type"] == "fuzzy"
        assert hit["matched_token"] == "jack"
        assert hit["edit_distance"] == 1

    def test_search_zero_limit_uses_max_limit(self, client):
        """A zero limit is capped at the configured maximum."""
        records = [
            {"id": i, "name": f"Sam{i}", "image_id": f"img_{i}.jpg"} for i in range(150)
        ]
        assert client.post("/api/v1/records", json={"records": records}).status_code == 200

        response = client.get("/api/v1/search/sam", params={"limit": 0})
        assert response.status_code == 200

        data = response.json()
        assert data["limit"] == 100
        assert data["total_results"] == 100

    def test_search_no_match(self, loaded_client):
        response = loaded_client.get("/api/v1/search/xyz")
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_search_limit_too_large(self, loaded_client):
        response = loaded_client.get("/api/v1/search/jack", params={"limit": 1000})
        assert response.status_code == 400

    def test_search_negative_limit(self, loaded_client):
        response = loaded_client.get("/api/v1/search/jack", params={"limit": -1})
        assert response.status_code == 422

    def test_search_query_too_long(self, loaded_client):
        response = loaded_client.get("/api/v1/search/" + "a" * 101)
        assert response.status_code == 400

    def test_images_by_query_string(self, loaded_client):
        """Results follow dataset order and skip unknown ids."""
        response = loaded_client.get("/api/v1/images", params={"ids": "3,1,999"})
        assert response.status_code == 200

        data = response.json()
        assert data["requested"] == 3
        assert data["results"] == [
            {"id": 1, "image_id": "img_040.jpg"},
            {"id": 3, "image_id": "img_042.jpg"},
        ]

    def test_images_by_body(self, loaded_client):
        response = loaded_client.post("/api/v1/images", json={"ids": [2, "3"]})
        assert response.status_code == 200
        assert [image["id"] for image in response.json()["results"]] == [2, 3]

    def test_images_empty_request(self, loaded_client):
        response = loaded_client.get("/api/v1/images")
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_images_before_load(self, client):
        response = client.get("/api/v1/images", params={"ids": "1"})
        assert response.status_code == 409

    def test_reload_missing_file(self, client, tmp_path, monkeypatch):
        monkeypatch.setattr(records_api.settings, "data_file", str(tmp_path / "missing.csv"))

        response = client.post("/api/v1/records/reload")
        assert response.status_code == 404

    def test_reload_from_file(self, client, tmp_path, monkeypatch):
        path = tmp_path / "subject_images.csv"
        path.write_text(
            "id,name,image_id\n104,Jack,img_040.jpg\n105,Anne,img_041.jpg\n",
            encoding="utf-16-le"
        )
        monkeypatch.setattr(records_api.settings, "data_file", str(path))

        response = client.post("/api/v1/records/reload")
        assert response.status_code == 200
        assert response.json()["total_records"] == 2

        response = client.get("/api/v1/images", params={"ids": "105"})
        assert response.json()["results"] == [{"id": 105, "image_id": "img_041.jpg"}]

    def test_health_before_load(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "degraded"
        assert data["loaded"] is False

    def test_health_after_load(self, loaded_client):
        data = loaded_client.get("/api/v1/health").json()
        assert data["status"] == "healthy"
        assert data["loaded"] is True

    def test_readiness(self, client, sample_records):
        assert client.get("/api/v1/health/ready").status_code == 503

        client.post("/api/v1/records", json={"records": sample_records})
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["index_stats"]["total_records"] == 3

    def test_load_handlers_run_off_the_event_loop(self):
        """Load handlers are plain functions so FastAPI runs them in its thread pool."""
        assert not inspect.iscoroutinefunction(records_api.load_records)
        assert not inspect.iscoroutinefunction(records_api.reload_records)

    def test_liveness(self, client):
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_status(self, loaded_client):
        loaded_client.get("/api/v1/search/jack")

        response = loaded_client.get("/api/v1/status")
        assert response.status_code == 200

        data = response.json()
        assert data["configuration"]["max_edit_distance"] == 1
        assert data["statistics"]["total_queries"] >= 1
