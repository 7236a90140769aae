"""Asynchronous command server whose ``timer N`` command answers again after N seconds."""

from __future__ import annotations

import argparse
import asyncio
import re
import socket
import sys
from contextlib import suppress
from typing import BinaryIO, NamedTuple, TextIO

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_CLIENT_HOST = "127.0.0.1"
DEFAULT_PORT = 1234
EXIT_COMMAND = "exit"
TIMER_COMMAND = "timer"
CLIENT_PROMPT = "Enter a command (timer N or exit): "

READY_PREFIX = "Ready in "
READY_SUFFIX = " sec\n"
DONE_REPLY = "Done!\n"
UNKNOWN_REPLY = "Unknown command\n"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_WORD = re.compile(r"[ \t\n\v\f\r]*([^ \t\n\v\f\r]+)")
_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class Command(NamedTuple):
    """A parsed command line: the first word and the integer after it."""

    name: str
    delay: int


def parse_command(line: str) -> Command:
    """Split ``line`` into a command word and a delay; a missing delay is 0.

    A delay outside the 32-bit range is clamped to it.
    """
    word = _WORD.match(line)
    if word is None:
        return Command("", 0)
    number = _INTEGER.match(line, word.end())
    delay = 0
    if number is not None:
        delay = min(max(int(number.group(1)), _INT_MIN), _INT_MAX)
    return Command(word.group(1), delay)


def _ready_reply(delay: int) -> str:
    return f"{READY_PREFIX}{delay}{READY_SUFFIX}"


async def handle_session(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> None:
    """Answer commands one after another until the peer leaves."""
    try:
        while True:
            raw = await reader.readline()
            if not raw.endswith(b"\n"):
                break
            command = parse_command(raw[:-1].decode(_ENCODING, _ERRORS))
            if command.name == TIMER_COMMAND and command.delay > 0:
                writer.write(_ready_reply(command.delay).encode(_ENCODING))
                await writer.drain()
                await asyncio.sleep(command.delay)
                writer.write(DONE_REPLY.encode(_ENCODING))
            else:
                writer.write(UNKNOWN_REPLY.encode(_ENCODING))
            await writer.drain()
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
    """Prompt for commands on ``stdin`` and print the server's replies to ``stdout``.

    After a command that starts with ``timer`` a second reply is awaited.
    """
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
            stdout.write(f"Server: {_read_line(replies)}\n")
            if text.startswith(TIMER_COMMAND):
                stdout.write(f"Server: {_read_line(replies)}\n")
            stdout.flush()


def _parser(description: str, default_host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=default_host)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Run the timer command server."""
    args = _parser("Timer command server", DEFAULT_SERVER_HOST).parse_args(argv)
    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Run the interactive timer client on the terminal."""
    args = _parser("Timer command client", DEFAULT_CLIENT_HOST).parse_args(argv)
    try:
        run_client(args.host, args.port, sys.stdin, sys.stdout)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 0