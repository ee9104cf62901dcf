"""
Tests for the error handling and request size middlewares.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.exceptions import ConflictError, NotFoundError
from middlewares.error_handler import ErrorHandlerMiddleware
from middlewares.request_size import RequestSizeLimitMiddleware


def build_app(show_details: bool) -> FastAPI:
    app = FastAPI()

    @app.get("/missing")
    def missing():
        raise NotFoundError("Widget 42 not found")

    @app.get("/conflict")
    def conflict():
        raise ConflictError()

    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    @app.post("/echo")
    async def echo(payload: dict):
        return payload

    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=64)
    app.add_middleware(ErrorHandlerMiddleware, show_details=show_details)
    return app


@pytest.fixture
def client():
    return TestClient(build_app(show_details=False))


@pytest.fixture
def debug_client():
    return TestClient(build_app(show_details=True))


class TestErrorHandler:
    """Test cases for error responses"""

    def test_gateway_error_maps_to_status(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Widget 42 not found", "status": 404}

    def test_default_message(self, client):
        response = client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["message"] == "Resource already exists"

    def test_unexpected_error_hides_details(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "internal_error"
        assert "detail" not in data
        assert "database exploded" not in response.text

    def test_unexpected_error_details_in_development(self, debug_client):
        response = debug_client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["detail"] == "RuntimeError: database exploded"
        assert any("raise RuntimeError" in line for line in data["trace"])


class TestRequestSizeLimit:
    """Test cases for the body size limit"""

    def test_small_body_accepted(self, client):
        response = client.post("/echo", json={"a": 1})

        assert response.status_code == 200
        assert response.json() == {"a": 1}

    def test_large_body_rejected(self, client):
        response = client.post("/echo", json={"data": "x" * 100})

        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"

    def test_chunked_body_counted(self, client):
        chunks = iter([b'{"data": "', b"x" * 100, b'"}'])

        response = client.post("/echo", content=chunks, headers={"Content-Type": "application/json"})

        assert response.status_code == 413
        assert response.json()["error"] == "payload_too_large"

    def test_small_chunked_body_accepted(self, client):
        chunks = iter([b'{"a": ', b"1}"])

        response = client.post("/echo", content=chunks, headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        assert response.json() == {"a": 1}
