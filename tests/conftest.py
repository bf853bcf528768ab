"""
Test configuration and fixtures for the KORAT SEO Audit API.

The database is a throwaway SQLite file unless TEST_DATABASE_URL is set, and
the environment is prepared before any korat module is imported.
"""

import os
import tempfile
from typing import Generator

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

load_dotenv()

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    if "postgresql://" in test_db_url and "asyncpg" not in test_db_url:
        test_db_url = test_db_url.replace("postgresql://", "postgresql+asyncpg://")
    os.environ["DATABASE_URL"] = test_db_url
else:
    test_db_path = tempfile.mktemp(suffix=".db")
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "korat-test-logs"))

TEST_USER_ID = "user-123"


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from korat.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Clean TestClient per test. Entering the context runs the lifespan, which
    creates the tables.
    """
    with TestClient(test_app) as test_client:
        yield test_client


def override_get_current_user_id():
    """Mock dependency that always returns a fixed authenticated user."""
    return TEST_USER_ID


@pytest.fixture
def auth_client(client, test_app):
    """Client with the identity dependency overridden for authenticated tests."""
    from korat.features.auth.dependencies.identity import get_current_user_id

    test_app.dependency_overrides[get_current_user_id] = override_get_current_user_id

    yield client

    test_app.dependency_overrides.pop(get_current_user_id, None)


@pytest.fixture
def auth_headers():
    from korat.features.auth.utils.security import create_access_token

    def _headers(user_id: str = TEST_USER_ID):
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


def build_html(
    title="Example Domain",
    description="A short description of the example page.",
    h1_count=1,
    images=('<img src="a.png" alt="A">',),
    lang="en",
    canonical=True,
    viewport=True,
    body_padding="",
):
    """Assemble a page whose every signal can be toggled from the test."""
    head = []
    if title is not None:
        head.append(f"<title>{title}</title>")
    if description is not None:
        head.append(f'<meta name="description" content="{description}">')
    if canonical:
        head.append('<link rel="canonical" href="https://example.com/">')
    if viewport:
        head.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')

    body = [f"<h1>Heading {i}</h1>" for i in range(h1_count)]
    body.extend(images)
    body.append('<p>Read <a href="/about">about us</a> today.</p>')
    body.append(body_padding)

    html_open = f'<html lang="{lang}">' if lang else "<html>"
    return f"{html_open}<head>{''.join(head)}</head><body>{''.join(body)}</body></html>"


@pytest.fixture
def make_html():
    return build_html
