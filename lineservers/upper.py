"""Blocking line server that answers with the upper-cased line and its length."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import BinaryIO

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_CLIENT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
CLIENT_PROMPT = "Enter a line: "

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _read_line(stream: BinaryIO) -> str:
    """Read one newline-terminated line and return it without the newline."""
    raw = stream.readline()
    if not raw.endswith(b"\n"):
        raise ConnectionError("connection closed before end of line")
    return raw[:-1].decode(_ENCODING, _ERRORS)


def to_upper_reply(line: str) -> str:
    """Build the reply: byte length, a colon and the ASCII upper-cased line."""
    raw = line.encode(_ENCODING, _ERRORS).upper()
    return f"{len(raw)}: {raw.decode(_ENCODING, _ERRORS)}\n"


def handle_client(conn: socket.socket) -> None:
    """Answer a single line on ``conn`` and close it; errors go to stderr."""
    with conn:
        try:
            with conn.makefile("rb") as stream:
                line = _read_line(stream)
            conn.sendall(to_upper_reply(line).encode(_ENCODING, _ERRORS))
        except OSError as exc:
            print(f"Client handling error: {exc}", file=sys.stderr)


def serve(host: str, port: int) -> None:
    """Accept clients one at a time, forever."""
    with socket.create_server((host, port)) as listener:
        print(f"Server started on port {port}", flush=True)
        while True:
            conn, address = listener.accept()
            print(f"New connection: {address[0]}:{address[1]}", flush=True)
            handle_client(conn)


def send_line(host: str, port: int, message: str) -> str:
    """Send ``message`` as one line and return the server's reply line."""
    with socket.create_connection((host, port)) as sock:
        sock.sendall((message + "\n").encode(_ENCODING, _ERRORS))
        with sock.makefile("rb") as stream:
            return _read_line(stream)


def _parser(description: str, default_host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=default_host)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Run the upper-casing server."""
    args = _parser("Upper-casing line server", DEFAULT_SERVER_HOST).parse_args(argv)
    try:
        serve(args.host, args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"Server error: {exc}", file=sys.stderr)
        return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Read one line from the terminal, send it and print the reply."""
    args = _parser("Upper-casing line client", DEFAULT_CLIENT_HOST).parse_args(argv)
    try:
        try:
            message = input(CLIENT_PROMPT)
        except EOFError:
            message = ""
        reply = send_line(args.host, args.port, message)
    except OSError as exc:
        print(f"Client error: {exc}", file=sys.stderr)
        return 1
    print(f"Server response: {reply}")
    return 0