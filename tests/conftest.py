import logging
import os
import socket
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import List

import pytest

from alert_trigger.config import settings as settings_module
from alert_trigger.utils.structured_logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop ALERT_TRIGGER_* overrides so each test sees default settings."""
    for key in list(os.environ):
        if key.startswith("ALERT_TRIGGER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_module, "_settings", None)
    yield
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)


@dataclass
class RecordedRequest:
    method: str
    path: str
    content_type: str
    body: bytes


@dataclass
class MockAlertmanager:
    """Threaded HTTP server standing in for Alertmanager."""

    status: int = 200
    response_body: bytes = b""
    requests: List[RecordedRequest] = field(default_factory=list)

    def start(self):
        mock = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length", 0))
                mock.requests.append(
                    RecordedRequest(
                        method="POST",
                        path=self.path,
                        content_type=self.headers.get("Content-Type", ""),
                        body=self.rfile.read(length),
                    )
                )
                self.send_response(mock.status)
                self.send_header("Content-Type", "text/plain")
                self.send_header("Content-Length", str(len(mock.response_body)))
                self.end_headers()
                self.wfile.write(mock.response_body)

            def log_message(self, format, *args):
                pass

        self.server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        return self

    def stop(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join(timeout=5)

    @property
    def address(self) -> str:
        host, port = self.server.server_address[:2]
        return f"{host}:{port}"


@pytest.fixture
def alertmanager():
    server = MockAlertmanager().start()
    yield server
    server.stop()


@pytest.fixture
def silent_server():
    """A listening socket that accepts connections but never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    host, port = sock.getsockname()
    yield f"{host}:{port}"
    sock.close()


@pytest.fixture
def closed_port_address():
    """An address on which nothing is listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()
    sock.close()
    return f"{host}:{port}"


class TricklingServer:
    """Answers one request with ``head``, then writes ``drip`` every ``interval`` seconds."""

    def __init__(self, head: bytes, drip: bytes, interval: float = 0.1):
        self.head = head
        self.drip = drip
        self.interval = interval
        self.stopped = threading.Event()
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(8)
        self.sock.settimeout(0.2)
        self.thread = threading.Thread(target=self._serve, daemon=True)

    def start(self):
        self.thread.start()
        return self

    def _serve(self):
        while not self.stopped.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                try:
                    conn.recv(65536)
                    conn.sendall(self.head)
                    while not self.stopped.wait(self.interval):
                        conn.sendall(self.drip)
                except ConnectionError:
                    pass

    def stop(self):
        self.stopped.set()
        self.thread.join(timeout=5)
        self.sock.close()

    @property
    def address(self) -> str:
        host, port = self.sock.getsockname()
        return f"{host}:{port}"


@pytest.fixture
def trickling_server():
    """Factory for servers that keep a response open by sending a few bytes at a time."""
    servers = []

    def start(head: bytes, drip: bytes, interval: float = 0.1) -> TricklingServer:
        server = TricklingServer(head, drip, interval).start()
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.stop()
