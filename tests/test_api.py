import logging

import pytest
from fastapi.testclient import TestClient

from api_reference.catalog.loader import load_catalog
from api_reference.config import Settings
from api_reference.server.app import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings()))


@pytest.fixture
def catalog():
    return load_catalog()


def _wire(category) -> dict:
    return category.model_dump(mode="json", by_alias=True, exclude_none=True)


class TestListCategories:
    def test_returns_all_categories(self, client, catalog):
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == [_wire(c) for c in catalog.categories]

    def test_uses_wire_field_names(self, client):
        data = client.get("/api/categories").json()
        linking = next(c for c in data if c["id"] == "patient-linking")
        demo = next(ep for ep in linking["endpoints"] if ep["id"] == "get-patient-links-demo")
        assert "searchParams" in demo
        assert "search_params" not in demo

    def test_absent_search_params_omitted(self, client):
        data = client.get("/api/categories").json()
        create = data[0]["endpoints"][0]
        assert create["id"] == "create-patient"
        assert "searchParams" not in create


class TestGetCategory:
    @pytest.mark.parametrize("category_id", ["patient-management", "fhir-apis", "pix-feed", "administrative"])
    def test_returns_stored_category(self, client, catalog, category_id):
        response = client.get(f"/api/categories/{category_id}")
        assert response.status_code == 200
        stored = next(c for c in catalog.categories if c.id == category_id)
        assert response.json() == _wire(stored)

    def test_unknown_id_is_404(self, client):
        response = client.get("/api/categories/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}

    def test_lookup_is_case_sensitive(self, client):
        response = client.get("/api/categories/FHIR-APIS")
        assert response.status_code == 404


class TestReadOnly:
    @pytest.mark.parametrize("method", ["post", "put", "delete"])
    def test_write_verbs_not_allowed(self, client, method):
        response = getattr(client, method)("/api/categories")
        assert response.status_code == 405


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["categories"] == 7
        assert data["endpoints"] == 24


class TestAlternateCatalog:
    def test_serves_catalog_from_settings(self, tmp_path):
        path = tmp_path / "mini.yaml"
        path.write_text(
            "info:\n"
            "  title: Mini\n"
            "categories:\n"
            "  - id: only\n"
            "    name: Only\n"
            "    description: ''\n"
            "    color: '#000'\n"
            "    endpoints: []\n",
            encoding="utf-8",
        )
        client = TestClient(create_app(Settings(catalog_path=path)))
        assert client.get("/api/categories").json() == [
            {"id": "only", "name": "Only", "description": "", "color": "#000", "endpoints": []}
        ]
        assert client.get("/api/categories/only").status_code == 200


def _app_with_failing_route(settings: Settings):
    app = create_app(settings)

    @app.get("/api/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


class TestErrorHandling:
    def test_unhandled_error_shows_detail_in_debug(self):
        client = TestClient(_app_with_failing_route(Settings(debug=True)), raise_server_exceptions=False)
        response = client.get("/api/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "detail": "kaboom"}

    def test_unhandled_error_hides_detail_outside_debug(self):
        client = TestClient(_app_with_failing_route(Settings()), raise_server_exceptions=False)
        response = client.get("/api/boom")
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["detail"] is None

    def test_unhandled_error_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="api_reference.server.app")
        client = TestClient(_app_with_failing_route(Settings()), raise_server_exceptions=False)
        client.get("/api/boom")
        errors = [r for r in caplog.records if r.name == "api_reference.server.app" and r.levelno == logging.ERROR]
        assert errors
        assert errors[0].getMessage() == "Unhandled error on GET /api/boom"


class TestRequestLogging:
    def test_logs_api_requests(self, client, caplog):
        caplog.set_level(logging.INFO, logger="api_reference.server.app")
        client.get("/api/categories")
        assert "GET /api/categories -> 200" in caplog.text

    def test_logs_not_found_status(self, client, caplog):
        caplog.set_level(logging.INFO, logger="api_reference.server.app")
        client.get("/api/categories/nope")
        assert "GET /api/categories/nope -> 404" in caplog.text

    def test_skips_non_api_paths(self, client, caplog):
        caplog.set_level(logging.INFO, logger="api_reference.server.app")
        client.get("/health")
        assert "/health ->" not in caplog.text
