import os
import shutil
import tempfile

import pytest

os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="donorbook-test-")
for _name in ("LOG_FILE", "UPLOAD_DIR", "DATABASE_URL", "EMAIL_LOG_FILE",
              "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS", "SMTP_FROM"):
    os.environ.pop(_name, None)

from starlette.testclient import TestClient
from main import app
from core import log_store, mailer
from core.constants import main_values
from core.constants.main_values import DATA_DIR, EMAIL_LOG_FILE, LOG_FILE, UPLOAD_DIR


def _wipe_data():
    log_store.dispose_engine()
    for path in (LOG_FILE, EMAIL_LOG_FILE, os.path.join(DATA_DIR, "donorbook.db")):
        if os.path.exists(path):
            os.remove(path)
    if os.path.exists(UPLOAD_DIR):
        shutil.rmtree(UPLOAD_DIR)


@pytest.fixture(scope="function", autouse=True)
def clean_data_dir():
    """Clean log file, database and uploads before each test"""
    _wipe_data()
    yield
    _wipe_data()


@pytest.fixture(scope="function")
def client():
    """Create a test client"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def people():
    return [
        {"name": "Dan", "amount": 50},
        {"name": "Ann", "amount": None},
        {"name": "Eve", "amount": 50},
    ]


class FakeSMTP:
    """Stands in for smtplib.SMTP and records every session."""
    sessions = []
    fail_with = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.credentials = None
        self.started_tls = False
        self.messages = []
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        FakeSMTP.sessions.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def ehlo(self):
        pass

    def has_extn(self, name):
        return name == "starttls"

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.credentials = (user, password)

    def send_message(self, message):
        self.messages.append(message)


@pytest.fixture
def smtp(monkeypatch):
    """Routes outgoing mail to FakeSMTP with a configured server"""
    FakeSMTP.sessions = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(main_values, "SMTP_HOST", "smtp.example.org")
    monkeypatch.setattr(main_values, "SMTP_USER", "office@example.org")
    monkeypatch.setattr(main_values, "SMTP_PASS", "secret")
    monkeypatch.setattr(main_values, "SMTP_FROM", "office@example.org")
    yield FakeSMTP
