"""Asynchronous server that replies with the largest integer on each line."""

from __future__ import annotations

import argparse
import asyncio
import re
import socket
import sys
from contextlib import suppress
from typing import BinaryIO, TextIO

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_CLIENT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
EXIT_COMMAND = "exit"
CLIENT_PROMPT = "Enter numbers separated by spaces (or 'exit' to quit): "

MAX_PREFIX = "Максимум: "
NO_NUMBERS_REPLY = "Ошибка: нет чисел для обработки\n"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_PATTERN = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def parse_numbers(line: str) -> list[int]:
    """Read 32-bit integers from the start of ``line`` until one cannot be read."""
    numbers: list[int] = []
    pos = 0
    while match := _INT_PATTERN.match(line, pos):
        value = int(match.group(1))
        if not _INT_MIN <= value <= _INT_MAX:
            break
        numbers.append(value)
        pos = match.end()
    return numbers


def _reply_for(numbers: list[int]) -> str:
    if numbers:
        return f"{MAX_PREFIX}{max(numbers)}\n"
    return NO_NUMBERS_REPLY


def max_reply(line: str) -> str:
    """Return the reply line the server sends for ``line``."""
    return _reply_for(parse_numbers(line))


async def handle_session(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> None:
    """Answer lines until the peer leaves or sends a line without numbers."""
    try:
        while True:
            raw = await reader.readline()
            if not raw.endswith(b"\n"):
                break
            numbers = parse_numbers(raw[:-1].decode(_ENCODING, _ERRORS))
            writer.write(_reply_for(numbers).encode(_ENCODING, _ERRORS))
            await writer.drain()
            if not numbers:
                break
    except (OSError, ValueError):
        pass
    finally:
        writer.close()
        with suppress(OSError):
            await writer.wait_closed()


async def serve(host: str, port: int) -> None:
    """Serve sessions until cancelled."""
    server = await asyncio.start_server(handle_session, host, port)
    print(f"Server started on port {port}", flush=True)
    async with server:
        await server.serve_forever()


def _read_line(stream: BinaryIO) -> str:
    raw = stream.readline()
    if not raw.endswith(b"\n"):
        raise ConnectionError("connection closed by server")
    return raw[:-1].decode(_ENCODING, _ERRORS)


def run_client(host: str, port: int, stdin: TextIO, stdout: TextIO) -> None:
    """Prompt for lines on ``stdin`` and print each server reply to ``stdout``."""
    with socket.create_connection((host, port)) as sock, sock.makefile("rb") as replies:
        while True:
            stdout.write(CLIENT_PROMPT)
            stdout.flush()
            entered = stdin.readline()
            if not entered:
                break
            text = entered[:-1] if entered.endswith("\n") else entered
            if text == EXIT_COMMAND:
                break
            sock.sendall((text + "\n").encode(_ENCODING, _ERRORS))
            stdout.write(f"Server response: {_read_line(replies)}\n")
            stdout.flush()


def _parser(description: str, default_host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=default_host)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Run the maximum-finding server."""
    args = _parser("Maximum-finding line server", DEFAULT_SERVER_HOST).parse_args(argv)
    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Run the interactive client on the terminal."""
    args = _parser("Maximum-finding line client", DEFAULT_CLIENT_HOST).parse_args(argv)
    try:
        run_client(args.host, args.port, sys.stdin, sys.stdout)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 0