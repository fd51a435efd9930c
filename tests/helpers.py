"""Shared fixtures for API tests: fresh database, CSRF-aware requests and logins."""

import httpx
from fastapi.testclient import TestClient

from usermanager.core.database import engine
from usermanager.core.ratelimit import limiter
from usermanager.core.seed import init_db
from usermanager.main import app
from usermanager.models import Base

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "Admin_Pass_1"
USER_USERNAME = "user"
USER_PASSWORD = "User_Pass_1"


def reset_database() -> None:
    """Drop and recreate all tables, then seed the default accounts."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    limiter.reset()


def new_client() -> TestClient:
    return TestClient(app)


def csrf_headers(client: TestClient) -> dict[str, str]:
    """Fetch a CSRF token (setting the secret cookie on client) and return the header."""
    response = client.get("/api/csrf-token")
    return {"CSRF-Token": response.json()["csrfToken"]}


def post(client: TestClient, url: str, json: object | None = None) -> httpx.Response:
    return client.post(url, json=json, headers=csrf_headers(client))


def put(client: TestClient, url: str, json: object) -> httpx.Response:
    return client.put(url, json=json, headers=csrf_headers(client))


def delete(client: TestClient, url: str) -> httpx.Response:
    return client.delete(url, headers=csrf_headers(client))


def login(client: TestClient, username: str, password: str) -> httpx.Response:
    return post(client, "/api/auth/login", {"username": username, "password": password})


def admin_client() -> TestClient:
    client = new_client()
    response = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert response.status_code == 200, response.text
    return client


def user_client() -> TestClient:
    client = new_client()
    response = login(client, USER_USERNAME, USER_PASSWORD)
    assert response.status_code == 200, response.text
    return client
