"""Unit tests for exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import (
    AvatarTooLargeError,
    DuplicateEmailError,
    FieldError,
    ProfileValidationError,
    VersionConflictError,
)


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_validation_error_lists_fields(self) -> None:
        app = _create_test_app()

        @app.get("/raise-validation")
        async def _() -> None:
            raise ProfileValidationError(
                [FieldError("name", "Name is required"), FieldError("email", "Invalid email address")]
            )

        response = await _get(app, "/raise-validation")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == [
            {"field": "name", "message": "Name is required"},
            {"field": "email", "message": "Invalid email address"},
        ]

    @pytest.mark.asyncio
    async def test_version_conflict_exposes_current_version(self) -> None:
        app = _create_test_app()

        @app.get("/raise-conflict")
        async def _() -> None:
            raise VersionConflictError(7)

        response = await _get(app, "/raise-conflict")

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "VERSION_CONFLICT"
        assert body["currentVersion"] == 7
        assert body["details"]["currentVersion"] == 7

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self) -> None:
        app = _create_test_app()

        @app.get("/raise-duplicate")
        async def _() -> None:
            raise DuplicateEmailError("a@b.com")

        response = await _get(app, "/raise-duplicate")

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_EMAIL"
        assert "currentVersion" not in response.json()

    @pytest.mark.asyncio
    async def test_avatar_too_large_returns_413(self) -> None:
        app = _create_test_app()

        @app.get("/raise-too-large")
        async def _() -> None:
            raise AvatarTooLargeError(2 * 1024 * 1024)

        response = await _get(app, "/raise-too-large")

        assert response.status_code == 413
        body = response.json()
        assert body["error_code"] == "PAYLOAD_TOO_LARGE"
        assert body["message"] == "Avatar too large (max 2MB)"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=405, detail="Method Not Allowed")

        response = await _get(app, "/raise-http")

        assert response.status_code == 405
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Method Not Allowed"

    @pytest.mark.asyncio
    async def test_request_validation_error_returns_400(self) -> None:
        app = _create_test_app()

        @app.get("/typed")
        async def _(count: int) -> dict[str, int]:
            return {"count": count}

        response = await _get(app, "/typed?count=many")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "count"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        import json
        from unittest.mock import MagicMock

        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        exc = RuntimeError("Something went wrong")

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, exc)  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "test-req-id"
