# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides settings, logger and application fixtures
# - Replaces the Solana RPC client with an in-memory fake
# =============================================================================

import io
import os
from types import SimpleNamespace

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================

os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("SERVER_PORT", "3000")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient
from solders.hash import Hash

from app.config import Settings
from app.main import create_app
from lib.database import Database
from lib.logger import Logger


# =============================================================================
# Helpers
# =============================================================================

@dataclass
class CapturedLogger:
    """Logger writing into in-memory streams."""
    logger: Logger
    stdout: io.StringIO
    stderr: io.StringIO

    def out_lines(self) -> list[str]:
        return self.stdout.getvalue().splitlines()

    def err_lines(self) -> list[str]:
        return self.stderr.getvalue().splitlines()


class FakeRpcClient:
    """
    Stand-in for solana.rpc.async_api.AsyncClient.

    Called like the client class; records the endpoint and answers
    get_latest_blockhash with a fixed hash (or raises `error`).
    """

    def __init__(self, blockhash: Hash, error: Exception | None = None):
        self.blockhash = blockhash
        self.error = error
        self.endpoints: list[str] = []

    def __call__(self, endpoint: str) -> "FakeRpcClient":
        self.endpoints.append(endpoint)
        return self

    async def __aenter__(self) -> "FakeRpcClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def get_latest_blockhash(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(value=SimpleNamespace(blockhash=self.blockhash))


def make_settings(**overrides) -> Settings:
    """Settings independent of any .env file on the machine."""
    values = {
        "NODE_ENV": "test",
        "SERVER_PORT": 3000,
        "SUPABASE_URL": "https://test-project.supabase.co",
        "SUPABASE_SERVICE_KEY": "test-service-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Default test settings."""
    return make_settings()


@pytest.fixture
def captured() -> CapturedLogger:
    """Logger whose output can be inspected."""
    stdout, stderr = io.StringIO(), io.StringIO()
    return CapturedLogger(Logger("test", stdout=stdout, stderr=stderr), stdout, stderr)


@pytest.fixture
def db(settings) -> Database:
    """Database handle that is never connected."""
    return Database(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)


@pytest.fixture
def app(settings, db, captured):
    """Application built from the shipped route files."""
    return create_app(settings, db=db, logger=captured.logger)


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client for the application."""
    return TestClient(app)


@pytest.fixture
def rpc(monkeypatch) -> FakeRpcClient:
    """Replace the Solana RPC client with a FakeRpcClient."""
    fake = FakeRpcClient(Hash.new_unique())
    monkeypatch.setattr("core.services.transfer_service.AsyncClient", fake)
    return fake
