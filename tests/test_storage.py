"""Tests for the private PDF stores."""

import pytest
import requests

import storage as storage_module
from exceptions import PdfStorageError
from storage import LocalStorageBackend, SupabaseStorageBackend, backend_from_config


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class TestSupabaseStorageBackend:
    """Upload requests against the storage REST API."""

    def test_upload_posts_to_private_bucket_without_upsert(self, monkeypatch) -> None:
        calls = []

        def fake_post(url, data=None, headers=None, timeout=None):
            calls.append((url, data, headers, timeout))
            return FakeResponse(200, {"Key": "pdf-storage/criteria-weighing-1.pdf"})

        monkeypatch.setattr(storage_module.requests, "post", fake_post)
        backend = SupabaseStorageBackend("https://example.supabase.co/", "service-key", "pdf-storage", timeout=5)

        backend.upload("criteria-weighing-1.pdf", b"%PDF-1.4")

        url, data, headers, timeout = calls[0]
        assert url == "https://example.supabase.co/storage/v1/object/pdf-storage/criteria-weighing-1.pdf"
        assert data == b"%PDF-1.4"
        assert headers["Authorization"] == "Bearer service-key"
        assert headers["Content-Type"] == "application/pdf"
        assert headers["x-upsert"] == "false"
        assert timeout == 5

    def test_error_response_raises_with_service_message(self, monkeypatch) -> None:
        monkeypatch.setattr(
            storage_module.requests, "post",
            lambda *a, **kw: FakeResponse(409, {"statusCode": "409", "message": "The resource already exists"}),
        )
        backend = SupabaseStorageBackend("https://example.supabase.co", "k", "pdf-storage")

        with pytest.raises(PdfStorageError, match="The resource already exists"):
            backend.upload("criteria-weighing-1.pdf", b"data")

    def test_error_without_json_body(self, monkeypatch) -> None:
        monkeypatch.setattr(storage_module.requests, "post", lambda *a, **kw: FakeResponse(502))
        backend = SupabaseStorageBackend("https://example.supabase.co", "k", "pdf-storage")

        with pytest.raises(PdfStorageError, match="HTTP 502"):
            backend.upload("criteria-weighing-1.pdf", b"data")

    def test_transport_error_raises(self, monkeypatch) -> None:
        def broken(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(storage_module.requests, "post", broken)
        backend = SupabaseStorageBackend("https://example.supabase.co", "k", "pdf-storage")

        with pytest.raises(PdfStorageError, match="connection refused"):
            backend.upload("criteria-weighing-1.pdf", b"data")


class TestLocalStorageBackend:
    """Directory store used without Supabase credentials."""

    def test_writes_file(self, tmp_path) -> None:
        backend = LocalStorageBackend(str(tmp_path / "pdf-storage"))

        backend.upload("criteria-weighing-3.pdf", b"%PDF")

        assert (tmp_path / "pdf-storage" / "criteria-weighing-3.pdf").read_bytes() == b"%PDF"

    def test_refuses_to_overwrite(self, tmp_path) -> None:
        backend = LocalStorageBackend(str(tmp_path))
        backend.upload("criteria-weighing-3.pdf", b"first")

        with pytest.raises(PdfStorageError, match="already exists"):
            backend.upload("criteria-weighing-3.pdf", b"second")
        assert (tmp_path / "criteria-weighing-3.pdf").read_bytes() == b"first"

    def test_rejects_nested_keys(self, tmp_path) -> None:
        with pytest.raises(PdfStorageError):
            LocalStorageBackend(str(tmp_path)).upload("../escape.pdf", b"x")


class TestBackendSelection:
    def test_supabase_when_credentials_present(self) -> None:
        backend = backend_from_config({
            "SUPABASE_URL": "https://example.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "key",
            "PDF_BUCKET": "pdf-storage",
            "PDF_STORAGE_DIR": "/tmp/unused",
        })

        assert isinstance(backend, SupabaseStorageBackend)
        assert backend.bucket == "pdf-storage"

    def test_local_without_credentials(self) -> None:
        backend = backend_from_config({"SUPABASE_URL": None, "PDF_STORAGE_DIR": "/tmp/pdfs"})

        assert isinstance(backend, LocalStorageBackend)
        assert backend.directory == "/tmp/pdfs"
