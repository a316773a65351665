"""Unit tests for request routing and handler outcomes."""

import logging
from pathlib import Path
from typing import Optional

import pytest

from httpwire.domain.file_store import FileStore, FileStoreError
from httpwire.domain.header_map import HeaderMap
from httpwire.domain.http_types import (
    CompressedBody,
    HttpRequest,
    Method,
    RawBody,
    Status,
)
from httpwire.pipeline.parser import split_path
from httpwire.pipeline.router import route_request


def make_request(
    target: str,
    *,
    method: Method = Method.GET,
    headers: Optional[dict[str, str]] = None,
    body: bytes = b"",
) -> HttpRequest:
    return HttpRequest(
        method,
        target,
        split_path(target),
        HeaderMap((headers or {}).items()),
        body,
    )


def test_root_returns_empty_ok(file_store: FileStore):
    response = route_request(make_request("/"), "gzip", file_store)
    assert response.status is Status.OK
    assert response.body == RawBody(b"")
    assert "content-type" not in response.headers


def test_echo_returns_text_verbatim(file_store: FileStore):
    response = route_request(make_request("/echo/abc"), None, file_store)
    assert response.status is Status.OK
    assert response.headers["Content-Type"] == "text/plain"
    assert response.body == RawBody(b"abc")
    assert "content-encoding" not in response.headers


def test_echo_with_negotiated_encoding_is_compressed(file_store: FileStore):
    response = route_request(make_request("/echo/abc"), "gzip", file_store)
    assert response.headers["Content-Encoding"] == "gzip"
    assert response.body == CompressedBody(b"abc", "gzip")


def test_echo_with_empty_text(file_store: FileStore):
    response = route_request(make_request("/echo/"), None, file_store)
    assert response.status is Status.OK
    assert response.body == RawBody(b"")


def test_echo_with_extra_segments_is_not_found(file_store: FileStore):
    response = route_request(make_request("/echo/a/b"), None, file_store)
    assert response.status is Status.NOT_FOUND


def test_user_agent_reflects_header(file_store: FileStore):
    request = make_request("/user-agent", headers={"user-agent": "foo-bar/1.0"})
    response = route_request(request, None, file_store)
    assert response.status is Status.OK
    assert response.headers["Content-Type"] == "text/plain"
    assert response.body == RawBody(b"foo-bar/1.0")


def test_user_agent_missing_is_bad_request(file_store: FileStore, caplog):
    caplog.set_level(logging.INFO, logger="httpwire.handlers.system")
    response = route_request(make_request("/user-agent"), None, file_store)
    assert response.status is Status.BAD_REQUEST
    assert response.body == RawBody(b"")
    assert any(
        getattr(record, "event", None) == "user_agent_missing"
        for record in caplog.records
    )


def test_file_get_returns_octet_stream(file_store: FileStore, tmp_path: Path):
    (tmp_path / "data.bin").write_bytes(b"\x00\x01payload")
    response = route_request(make_request("/files/data.bin"), None, file_store)
    assert response.status is Status.OK
    assert response.headers["Content-Type"] == "application/octet-stream"
    assert response.body == RawBody(b"\x00\x01payload")


def test_file_get_compresses_when_negotiated(file_store: FileStore, tmp_path: Path):
    (tmp_path / "data.txt").write_bytes(b"payload")
    response = route_request(make_request("/files/data.txt"), "gzip", file_store)
    assert response.body == CompressedBody(b"payload", "gzip")


@pytest.mark.parametrize("target", ["/files/does-not-exist", "/files/..", "/files/"])
def test_file_get_failures_are_not_found(file_store: FileStore, target: str):
    response = route_request(make_request(target), None, file_store)
    assert response.status is Status.NOT_FOUND
    assert response.body == RawBody(b"")


def test_file_post_persists_payload(file_store: FileStore, tmp_path: Path):
    request = make_request("/files/uploaded.txt", method=Method.POST, body=b"uploaded")
    response = route_request(request, "gzip", file_store)
    assert response.status is Status.CREATED
    assert response.body == RawBody(b"")
    assert (tmp_path / "uploaded.txt").read_bytes() == b"uploaded"


def test_file_post_forbidden_name(file_store: FileStore):
    request = make_request("/files/..", method=Method.POST, body=b"x")
    response = route_request(request, None, file_store)
    assert response.status is Status.FORBIDDEN


def test_file_post_write_failure_is_server_error(file_store: FileStore, monkeypatch):
    def failing_write(name: str, data: bytes) -> None:
        raise FileStoreError("disk full")

    monkeypatch.setattr(file_store, "write", failing_write)
    request = make_request("/files/a.txt", method=Method.POST, body=b"x")
    response = route_request(request, None, file_store)
    assert response.status is Status.INTERNAL_SERVER_ERROR


@pytest.mark.parametrize(
    ("method", "target"),
    [
        (Method.GET, "/unknown/path"),
        (Method.POST, "/unknown/path"),
        (Method.POST, "/"),
        (Method.POST, "/echo/abc"),
        (Method.GET, "/files"),
        (Method.GET, "/user-agent/extra"),
    ],
)
def test_unmatched_routes_are_not_found(file_store: FileStore, method, target):
    response = route_request(make_request(target, method=method), None, file_store)
    assert response.status is Status.NOT_FOUND
    assert response.body == RawBody(b"")


def test_routing_has_no_side_effects_beyond_file_store(
    file_store: FileStore, tmp_path: Path
):
    route_request(make_request("/echo/x"), None, file_store)
    route_request(make_request("/unknown", method=Method.POST, body=b"x"), None, file_store)
    assert list(tmp_path.iterdir()) == []
