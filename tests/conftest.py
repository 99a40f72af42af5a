import pathlib
import sys
from collections.abc import Callable

import httpx
import pytest
from starlette.requests import Request

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def _tiny_png() -> bytes:
    return (
        b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
        b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x00\x01\x00\x18\xdd\x8d\xb4\x00\x00\x00\x00IEND\xaeB`\x82"
    )


@pytest.fixture
def png_bytes() -> bytes:
    return _tiny_png()


def encode_multipart(files, data=None) -> tuple[bytes, dict[str, str]]:
    """Encode ``files``/``data`` the way an HTTP client would send them."""
    request = httpx.Request("POST", "http://testserver/upload", files=files, data=data)
    return request.read(), dict(request.headers)


def build_request(
    body: bytes,
    headers: dict[str, str],
    *,
    chunk_size: int | None = None,
) -> Request:
    """Return a Starlette request whose body is delivered in chunks."""
    size = chunk_size or max(len(body), 1)
    chunks = [body[i : i + size] for i in range(0, len(body), size)] or [b""]
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/upload",
        "query_string": b"",
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in headers.items()
        ],
    }

    async def receive():
        if not chunks:
            return {"type": "http.disconnect"}
        chunk = chunks.pop(0)
        return {"type": "http.request", "body": chunk, "more_body": bool(chunks)}

    return Request(scope, receive)


@pytest.fixture
def multipart_request() -> Callable[..., Request]:
    def _factory(files, data=None, *, drop_length: bool = False, chunk_size: int | None = None):
        body, headers = encode_multipart(files, data)
        if drop_length:
            headers.pop("content-length", None)
        return build_request(body, headers, chunk_size=chunk_size)

    return _factory


@pytest.fixture
def raw_request() -> Callable[..., Request]:
    return build_request
