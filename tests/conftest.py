"""Shared test fixtures for the GST compliance test suite."""

import asyncio
import os
from types import SimpleNamespace

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def make_doc():
    """Factory for stand-ins of invoice/purchase rows carrying per-head totals."""
    def _make(cgst=0, sgst=0, igst=0, **extra) -> SimpleNamespace:
        return SimpleNamespace(total_cgst=cgst, total_sgst=sgst, total_igst=igst, **extra)
    return _make


@pytest.fixture
def make_filing():
    """Factory for stand-ins of filing return rows."""
    def _make(status, due_date, filed_date=None, **extra) -> SimpleNamespace:
        fields = {"id": "f-1", "return_type": "GSTR-3B", "period": "042024"}
        fields.update(extra)
        return SimpleNamespace(status=status, due_date=due_date, filed_date=filed_date, **fields)
    return _make


@pytest.fixture
def api(event_loop):
    """Run ``scenario(client)`` against the app backed by a fresh in-memory DB.

    Usage::

        async def scenario(client):
            resp = await client.get("/api/v1/health")
            ...
        api(scenario)
    """
    import httpx
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from gst_compliance.core.db import build_engine, get_db
    from gst_compliance.infrastructure.db import models  # noqa: F401
    from gst_compliance.infrastructure.db.base import Base
    from gst_compliance.main import app

    def run(scenario):
        async def _go():
            engine = build_engine("sqlite+aiosqlite:///:memory:")
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            session_factory = async_sessionmaker(
                bind=engine, class_=AsyncSession, expire_on_commit=False
            )

            async def override_get_db():
                async with session_factory() as session:
                    yield session

            app.dependency_overrides[get_db] = override_get_db
            try:
                transport = httpx.ASGITransport(app=app)
                async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                    return await scenario(client)
            finally:
                app.dependency_overrides.clear()
                await engine.dispose()

        return event_loop.run_until_complete(_go())

    return run
