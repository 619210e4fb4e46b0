"""Shared fixtures: a temporary site tree and a recording API collaborator."""

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.models.schemas import RouterSettings


@pytest.fixture
def site_dir(tmp_path):
    """Create a temporary site with static files and fallback pages."""
    public = tmp_path / "public_html"
    public.mkdir()

    (public / "index.html").write_text("<h1>Index</h1>")
    (public / "app.js").write_text("console.log('app');")
    (public / "style.css").write_text("body { color: red; }")
    (public / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")

    docs = public / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    # Same path as an API route, to check rule priority
    api = public / "api"
    api.mkdir()
    (api / "ping").write_text("static ping")

    # Directory without an index page
    (public / "empty").mkdir()

    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "404.html").write_text("<h1>Not Found</h1>")

    (tmp_path / "secret.txt").write_text("outside the static root")

    return tmp_path


class RecordingApi:
    """ASGI collaborator stub that records every scope it is called with."""

    def __init__(self, status=200, body=b'{"status":"ok"}', headers=None):
        self.status = status
        self.body = body
        self.headers = headers or [
            (b"content-type", b"application/json"),
            (b"x-collaborator", b"stub"),
        ]
        self.calls = []

    async def __call__(self, scope, receive, send):
        self.calls.append(dict(scope))
        if scope["type"] == "websocket":
            await receive()
            await send({"type": "websocket.accept"})
            await send({"type": "websocket.send", "text": "hello from the API"})
            await send({"type": "websocket.close", "code": 1000})
            return
        await send({"type": "http.response.start", "status": self.status, "headers": self.headers})
        await send({"type": "http.response.body", "body": self.body})


@pytest.fixture
def api_stub():
    return RecordingApi()


@pytest.fixture
def spa_settings(site_dir):
    return RouterSettings(
        api_prefix="/api",
        static_root=str(site_dir / "public_html"),
        fallback_file=str(site_dir / "public_html" / "index.html"),
        fallback_status=200,
    )


@pytest.fixture
def not_found_settings(site_dir):
    return RouterSettings(
        api_prefix="/api",
        static_root=str(site_dir / "public_html"),
        fallback_file=str(site_dir / "resources" / "404.html"),
        fallback_status=404,
        fallback_methods=["GET"],
    )


@pytest.fixture
def spa_client(spa_settings, api_stub):
    return TestClient(create_app(spa_settings, api_stub))


@pytest.fixture
def not_found_client(not_found_settings, api_stub):
    return TestClient(create_app(not_found_settings, api_stub))
