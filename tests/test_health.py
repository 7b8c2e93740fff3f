from fastapi.testclient import TestClient
from mybiz_mailer.api.main import app
from mybiz_mailer.core.config import settings

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "app": settings.app_name, "env": settings.app_env}


def test_cors_allows_any_origin_by_default():
    r = client.options(
        f"/api/v1/user/{settings.otp_path}",
        headers={"Origin": "https://app.example.com", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] in ("*", "https://app.example.com")
