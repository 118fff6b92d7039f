"""Shared fixtures: application, client and an in-memory PDF store."""

from typing import Dict, Iterator, Optional

import pytest
from flask import Flask
from flask.testing import FlaskClient

from app import create_app
from config import TestConfig
from exceptions import PdfStorageError
from extensions import db


class FakeStorage:
    """Records uploads in memory; can be told to fail."""

    def __init__(self) -> None:
        self.objects: Dict[str, bytes] = {}
        self.error: Optional[str] = None

    def upload(self, key: str, data: bytes, content_type: str = "application/pdf") -> None:
        if self.error:
            raise PdfStorageError(self.error)
        if key in self.objects:
            raise PdfStorageError("The resource already exists")
        self.objects[key] = data


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def app(storage: FakeStorage) -> Iterator[Flask]:
    app = create_app(TestConfig, storage_backend=storage)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def valid_payload() -> dict:
    """Payload the form sends for the example ranking, importances 2 to 5."""
    names = {
        "C-1": "Performance",
        "C-2": "Battery Life",
        "C-3": "Display Quality",
        "C-4": "Portability",
        "C-5": "Price",
    }
    order = ["C-2", "C-1", "C-3", "C-5", "C-4"]
    ranked = [{"id": cid, "name": names[cid], "rank": i + 1} for i, cid in enumerate(order)]
    comparisons = [
        {"criterion1": ranked[i - 1], "criterion2": ranked[i], "importance": i + 1}
        for i in range(1, len(ranked))
    ]
    return {"ranked_criteria": ranked, "comparisons": comparisons}
