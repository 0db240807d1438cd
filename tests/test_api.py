"""Tests for the FastAPI stylize server."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.server import app
from darkroom.constants import Stock


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestCatalogue:
    """Read-only endpoints."""

    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_lists_every_stock(self, client: TestClient) -> None:
        resp = client.get("/stocks")
        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == len(Stock) == 17
        by_id = {entry["id"]: entry for entry in body}
        assert by_id["polaroid-1"]["instant_film"] is True
        assert by_id["blueprint"]["name"] == "Blueprint"


class TestStylize:
    """POST /stylize/{stock}."""

    def test_returns_jpeg(self, client: TestClient, png_bytes: bytes) -> None:
        resp = client.post("/stylize/mimeograph", content=png_bytes, params={"seed": 3})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/jpeg"
        assert resp.content[:2] == b"\xff\xd8"

    def test_seed_is_reproducible(self, client: TestClient, png_bytes: bytes) -> None:
        a = client.post("/stylize/vhs-worn", content=png_bytes, params={"seed": 21})
        b = client.post("/stylize/vhs-worn", content=png_bytes, params={"seed": 21})
        assert a.content == b.content

    def test_unknown_stock(self, client: TestClient, png_bytes: bytes) -> None:
        resp = client.post("/stylize/technicolor", content=png_bytes)
        assert resp.status_code == 404
        assert "technicolor" in resp.json()["detail"]

    def test_bad_body(self, client: TestClient) -> None:
        resp = client.post("/stylize/thermal", content=b"definitely not a photo")
        assert resp.status_code == 400

    def test_negative_seed_rejected(self, client: TestClient, png_bytes: bytes) -> None:
        resp = client.post("/stylize/thermal", content=png_bytes, params={"seed": -1})
        assert resp.status_code == 422

    def test_render_failure_is_500(self, client: TestClient, png_bytes: bytes, monkeypatch) -> None:
        import darkroom.pipeline as pipeline
        from darkroom.exceptions import RenderError

        def fail(*args, **kwargs):
            raise RenderError("canvas unavailable")

        monkeypatch.setattr(pipeline, "compose_frame", fail)
        resp = client.post("/stylize/polaroid-1", content=png_bytes)
        assert resp.status_code == 500
