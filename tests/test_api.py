from __future__ import annotations

from dataclasses import replace

from fastapi.testclient import TestClient

from jarvis_api.app import create_app
from jarvis_api.core.config import get_settings
from jarvis_api.db import models
from jarvis_api.db import session as db_session

PRODUCT = {
    "name": "Mark L",
    "description": "Nanotech armor housed in an arc reactor.",
    "price": 9999,
    "image": "https://cdn.jarvis.io/mk50.png",
    "category": "Suits",
    "features": ["Nanotech", "Self-repair"],
}


def _client(**overrides) -> TestClient:
    settings = replace(get_settings(), **overrides)
    return TestClient(create_app(settings, start_monitor=False))


def test_health_reports_disconnected_but_succeeds(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["persistence"] == "disconnected"
    assert body["uptime"] >= 0
    assert body["timestamp"].endswith("Z")


def test_health_reads_connection_state(client):
    client.app.state.connection_state.mark_connected()

    assert client.get("/api/health").json()["persistence"] == "connected"


def test_create_and_list_products(client):
    created = client.post("/api/products", json=PRODUCT)

    assert created.status_code == 201
    product = created.json()
    assert product["_id"]
    assert product["price"] == 9999
    listed = client.get("/api/products")
    assert listed.status_code == 200
    assert [p["_id"] for p in listed.json()] == [product["_id"]]


def test_invalid_product_returns_field_errors(client):
    resp = client.post("/api/products", json={**PRODUCT, "price": -1, "name": ""})

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation error"
    assert any(d.startswith('"price"') for d in body["details"])
    assert any(d.startswith('"name"') for d in body["details"])
    assert client.get("/api/products").json() == []


def test_malformed_json_is_a_validation_error(client):
    resp = client.post("/api/faqs", content="{not json", headers={"content-type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation error"


def test_faq_without_category(client):
    resp = client.post("/api/faqs", json={"question": "Can it fly?", "answer": "Mach 3."})

    assert resp.status_code == 201
    assert resp.json()["category"] == "general"
    assert client.get("/api/faqs").json()[0]["question"] == "Can it fly?"


def test_contact_acknowledgment_does_not_echo_message(client):
    payload = {"name": "Nick Fury", "email": "Fury@Shield.gov", "message": "Avengers initiative"}

    first = client.post("/api/contact", json=payload)
    second = client.post("/api/contact", json=payload)

    assert first.status_code == 201
    body = first.json()
    assert body["message"] == "Message sent successfully"
    assert set(body["data"]) == {"id", "createdAt"}
    assert "Avengers initiative" not in first.text
    assert body["data"]["id"] != second.json()["data"]["id"]
    contacts = client.get("/api/contact").json()
    assert len(contacts) == 2
    assert contacts[0]["email"] == "fury@shield.gov"
    assert contacts[0]["status"] == "pending"


def test_contact_with_bad_email(client):
    resp = client.post("/api/contact", json={"name": "Nick", "email": "fury-at-shield", "message": "Hi"})

    assert resp.status_code == 400
    assert resp.json()["details"][0].startswith('"email"')
    assert client.get("/api/contact").json() == []


def test_init_data_flow(client):
    first = client.post("/api/init-data", json={})
    second = client.post("/api/init-data")
    forced = client.post("/api/init-data", json={"force": True})

    assert first.status_code == 200
    assert first.json() == {
        "message": "Sample data initialized successfully",
        "data": {"products": 4, "faqs": 6},
    }
    assert second.json() == {"message": "Sample data already exists"}
    assert forced.json()["data"] == {"products": 4, "faqs": 6}
    assert len(client.get("/api/products").json()) == 4
    assert len(client.get("/api/faqs").json()) == 6


def test_init_data_force_must_be_boolean_true(client):
    client.post("/api/init-data")

    resp = client.post("/api/init-data", json={"force": "yes"})

    assert resp.json() == {"message": "Sample data already exists"}


def test_unknown_api_path_returns_structured_404(client):
    for resp in (client.get("/api/nope"), client.post("/api/nope/deeper", json={})):
        assert resp.status_code == 404
        assert resp.json() == {"message": "API endpoint not found"}


def test_storage_error_detail_is_suppressed(client):
    models.Base.metadata.drop_all(bind=db_session.get_engine())

    resp = client.get("/api/products")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Error fetching products", "error": "Internal server error"}


def test_storage_error_detail_in_development(temp_db):
    models.Base.metadata.drop_all(bind=db_session.get_engine())

    with _client(app_env="development") as dev_client:
        resp = dev_client.post("/api/contact", json={"name": "a", "email": "a@jarvis.io", "message": "b"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["message"] == "Error sending message"
    assert body["error"] != "Internal server error"
    assert "contacts" in body["error"]


def test_rate_limit_applies_to_api(temp_db):
    with _client(rate_limit_max_requests=2) as limited:
        assert limited.get("/api/health").status_code == 200
        assert limited.get("/api/faqs").status_code == 200
        resp = limited.get("/api/health")

    assert resp.status_code == 429
    assert resp.json() == {"message": "Too many requests from this IP, please try again later."}
    assert "retry-after" in resp.headers


def test_spa_shell_served_for_non_api_paths(temp_db, tmp_path):
    build = tmp_path / "build"
    build.mkdir()
    (build / "index.html").write_text("<html><body>JARVIS</body></html>", encoding="utf-8")
    (build / "robots.txt").write_text("User-agent: *", encoding="utf-8")

    with _client(client_build_dir=str(build)) as spa:
        page = spa.get("/products/holographic")
        robots = spa.get("/robots.txt")

    assert page.status_code == 200
    assert "JARVIS" in page.text
    assert robots.text == "User-agent: *"


def test_missing_client_build(client):
    resp = client.get("/")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Client build not found"}


def test_security_headers(client):
    resp = client.get("/api/health")

    assert resp.headers["x-frame-options"] == "DENY"
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert "default-src 'self'" in resp.headers["content-security-policy"]
    assert "strict-transport-security" not in resp.headers


def test_rate_limit_counts_unknown_api_paths(temp_db):
    with _client(rate_limit_max_requests=2) as limited:
        statuses = [limited.get("/api/nope").status_code for _ in range(4)]

    assert statuses == [404, 404, 429, 429]


def test_rate_limit_ignores_forwarded_for_by_default(temp_db):
    with _client(rate_limit_max_requests=2) as limited:
        statuses = [
            limited.get("/api/health", headers={"X-Forwarded-For": f"10.0.0.{i}"}).status_code
            for i in range(4)
        ]

    assert statuses == [200, 200, 429, 429]


def test_rate_limit_keys_on_forwarded_for_behind_trusted_proxy(temp_db):
    with _client(rate_limit_max_requests=1, trust_proxy=True) as limited:
        first = limited.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1, 172.16.0.1"})
        other = limited.get("/api/health", headers={"X-Forwarded-For": "10.0.0.2"})
        repeat = limited.get("/api/health", headers={"X-Forwarded-For": "10.0.0.1"})

    assert [first.status_code, other.status_code, repeat.status_code] == [200, 200, 429]


def test_importing_app_module_builds_nothing():
    from jarvis_api import app as app_module

    assert not hasattr(app_module, "app")
    assert callable(app_module.create_app)
