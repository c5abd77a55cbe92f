import json
import socketserver
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests
from requests.adapters import BaseAdapter


def make_response(request: requests.PreparedRequest, status_code: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.request = request
    response.url = request.url
    response._content = b""
    return response


class RecordingAdapter(BaseAdapter):
    """Inner transport that records what it was asked to send."""

    def __init__(self, error: Exception | None = None):
        super().__init__()
        self.error = error
        self.sent: list[tuple[requests.PreparedRequest, dict]] = []
        self.closed = False

    def send(self, request, **kwargs):
        self.sent.append((request, kwargs))
        if self.error is not None:
            raise self.error
        return make_response(request)

    def close(self):
        self.closed = True


def prepare(headers: dict[str, str] | None = None, url: str = "https://example.com/") -> requests.PreparedRequest:
    return requests.Request("GET", url, headers=headers).prepare()


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    return RecordingAdapter()


class _CloseHandler(socketserver.BaseRequestHandler):
    def handle(self):
        # Returning closes the socket before any TLS handshake completes
        pass


class _EchoHeadersHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = json.dumps(dict(self.headers.items())).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


def _serve(server):
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return thread


@pytest.fixture
def closing_server():
    """Local TCP listener that hangs up on every connection; yields its port."""
    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _CloseHandler)
    server.daemon_threads = True
    _serve(server)
    yield server.server_address[1]
    server.shutdown()
    server.server_close()


@pytest.fixture
def echo_server():
    """Local HTTP server answering with the request headers as JSON; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHeadersHandler)
    server.daemon_threads = True
    _serve(server)
    yield f"http://127.0.0.1:{server.server_address[1]}/"
    server.shutdown()
    server.server_close()
