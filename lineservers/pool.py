"""Threaded line server that prefixes a single line per connection, and its client."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
import time

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_CLIENT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
DEFAULT_THREAD_POOL_SIZE = 4
DEMO_REQUESTS = ("Hello", "Multithreaded", "Server")
DEMO_CLIENT_DELAY = 1.0

REPLY_PREFIX = "Processed: "

_ACCEPT_POLL = 0.1
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def processed_reply(line: str) -> str:
    """Return the reply line the server sends for ``line``."""
    return f"{REPLY_PREFIX}{line}\n"


class ThreadPoolServer:
    """Listens on ``host:port`` and serves connections from a pool of threads.

    Each connection gets one line read and answered, then is closed. The
    threads start as soon as the server is created.
    """

    def __init__(self, host: str, port: int, thread_pool_size: int) -> None:
        self._listener = socket.create_server((host, port))
        self._listener.settimeout(_ACCEPT_POLL)
        self.address: tuple[str, int] = self._listener.getsockname()[:2]
        self._stopped = threading.Event()
        self._strand = threading.Lock()
        self._threads = [
            threading.Thread(target=self._accept_loop, name=f"pool-{n}", daemon=True)
            for n in range(thread_pool_size)
        ]
        for thread in self._threads:
            thread.start()

    def run(self) -> None:
        """Block until every pool thread has finished."""
        for thread in self._threads:
            thread.join()

    def close(self) -> None:
        """Stop accepting connections; the pool threads finish their work and exit."""
        self._stopped.set()
        self._listener.close()

    def _accept_loop(self) -> None:
        while not self._stopped.is_set():
            try:
                conn, peer = self._listener.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            self._handle(conn, peer)

    def _handle(self, conn: socket.socket, peer: tuple) -> None:
        with conn:
            conn.settimeout(None)
            with self._strand:
                print(f"New connection from: {peer[0]}:{peer[1]}", flush=True)
            try:
                with conn.makefile("rb") as stream:
                    raw = stream.readline()
            except OSError:
                return
            if not raw.endswith(b"\n"):
                return
            reply = processed_reply(raw[:-1].decode(_ENCODING, _ERRORS))
            try:
                conn.sendall(reply.encode(_ENCODING, _ERRORS))
            except OSError as exc:
                with self._strand:
                    print(f"Write error: {exc}", file=sys.stderr)


class AsyncClient:
    """Line client that connects on creation and waits for one reply per request."""

    def __init__(self, host: str, port: int | str) -> None:
        self._sock = socket.create_connection((host, port))
        self._replies = self._sock.makefile("rb")

    def send_request(self, request: str) -> str:
        """Send ``request`` as one line and return the reply line without its newline."""
        self._sock.sendall((request + "\n").encode(_ENCODING, _ERRORS))
        raw = self._replies.readline()
        if not raw.endswith(b"\n"):
            raise ConnectionError("connection closed by server")
        return raw[:-1].decode(_ENCODING, _ERRORS)

    def close(self) -> None:
        """Close the connection."""
        self._replies.close()
        self._sock.close()


def _run_demo_client(host: str, port: int) -> None:
    time.sleep(DEMO_CLIENT_DELAY)
    try:
        client = AsyncClient(host, port)
    except OSError as exc:
        print(f"Connect error: {exc}", file=sys.stderr)
        return
    try:
        for request in DEMO_REQUESTS:
            try:
                reply = client.send_request(request)
            except OSError:
                continue
            print(f"Server response: {reply}", flush=True)
    finally:
        client.close()


def main(argv: list[str] | None = None) -> int:
    """Start the threaded server together with a client that sends a few requests."""
    parser = argparse.ArgumentParser(description="Thread-pool line server demo")
    parser.add_argument("--host", default=DEFAULT_SERVER_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--threads", type=int, default=DEFAULT_THREAD_POOL_SIZE)
    args = parser.parse_args(argv)
    try:
        server = ThreadPoolServer(args.host, args.port, args.threads)
    except OSError as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        return 0
    client_thread = threading.Thread(
        target=_run_demo_client,
        args=(DEFAULT_CLIENT_HOST, server.address[1]),
        daemon=True,
    )
    client_thread.start()
    try:
        server.run()
        client_thread.join()
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
    return 0