"""Shared fixtures for the submission service tests."""

from unittest.mock import MagicMock

import pytest

from prepay.main import create_app
from prepay.services.nas_service import NasResult
from prepay.storage import SubmissionStore


@pytest.fixture
def store():
    return SubmissionStore()


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def nas():
    """A stand-in NAS session whose uploads succeed."""
    session = MagicMock()
    session.upload_file.return_value = NasResult(True)
    session.check_connection.return_value = NasResult(True)
    return session


@pytest.fixture
def app(store, upload_dir):
    return create_app(
        "testing",
        store=store,
        config_overrides={"UPLOAD_FOLDER": str(upload_dir)},
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def nas_app(store, upload_dir, nas):
    return create_app(
        "testing",
        store=store,
        nas_session=nas,
        config_overrides={"UPLOAD_FOLDER": str(upload_dir)},
    )


@pytest.fixture
def nas_client(nas_app):
    return nas_app.test_client()
