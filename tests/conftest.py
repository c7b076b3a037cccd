import os

# Settings are cached on first import; keep tests off the real disk and sheet.
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["BACKUP_SHEET_URL"] = ""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from ecomission.backup.service import BackupService
from ecomission.core.config import Settings
from ecomission.core.dependencies import get_backup_service, get_store
from ecomission.core.storage import MemoryStorage
from ecomission.core.store import LocalStore
from ecomission.main import app
from ecomission.profile.service import ProfileService

SHEET_URL = "https://sheet.example.com/macros/s/test/exec"


class RecordingSheet:
    """Stands in for the backup sheet web app behind an httpx.MockTransport."""

    def __init__(self, rows=None, status_code=200, body=None):
        self.rows = rows if rows is not None else []
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            return httpx.Response(302, headers={"Location": "https://sheet.example.com/echo"})
        if self.body is not None:
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.rows)

    @property
    def posted(self):
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def backend():
    return MemoryStorage()


@pytest.fixture
def store(backend):
    return LocalStore(backend)


@pytest.fixture
def profile(store):
    return ProfileService(store)


@pytest.fixture
def sheet_settings():
    return Settings(STORAGE_BACKEND="memory", BACKUP_SHEET_URL=SHEET_URL)


@pytest.fixture
def sheet():
    return RecordingSheet()


@pytest.fixture
def backup(store, sheet_settings, sheet):
    return BackupService(store, sheet_settings, transport=sheet.transport())


@pytest.fixture
def client(store, backup):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_backup_service] = lambda: backup
    yield TestClient(app)
    app.dependency_overrides.clear()
