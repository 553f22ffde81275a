"""
Shared BDD fixtures and steps (pytest-bdd).
Scenarios run through a sync TestClient; each request gets its own committed session.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import parsers, then, when
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app


@pytest.fixture
def api_client():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    schema_ready = False

    async def override_get_db():
        nonlocal schema_ready
        if not schema_ready:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            schema_ready = True
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
        # Dispose on the client's event loop, where the connection was opened
        client.portal.call(engine.dispose)
    app.dependency_overrides.clear()


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(api_client, response, method, path):
    response["last"] = api_client.request(method, path)


@then(parsers.parse("the response status should be {code:d}"))
def status_is(response, code):
    assert response["last"].status_code == code, response["last"].text


@then(parsers.parse('the response text should be "{text}"'))
def text_is(response, text):
    assert response["last"].text == text


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["last"].json().get(key) == value
