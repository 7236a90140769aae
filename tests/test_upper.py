import io
import socket
import threading
import time

import pytest

from lineservers.upper import (
    client_main,
    handle_client,
    send_line,
    serve,
    server_main,
    to_upper_reply,
)


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _one_shot_server():
    listener = socket.create_server(("127.0.0.1", 0))
    port = listener.getsockname()[1]

    def run():
        with listener:
            conn, _ = listener.accept()
            handle_client(conn)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


def test_reply_for_ascii_word():
    assert to_upper_reply("hello") == "5: HELLO\n"


def test_reply_length_prefix_matches_body():
    reply = to_upper_reply("Mixed Case 123 !?")
    count, _, body = reply.rstrip("\n").partition(": ")
    assert int(count) == len(body)
    assert body == "MIXED CASE 123 !?"
    assert reply.endswith("\n")


def test_reply_counts_bytes_and_leaves_non_ascii():
    assert to_upper_reply("ё") == "2: ё\n"


def test_empty_line_reply():
    assert to_upper_reply("") == "0: \n"


def test_handle_client_over_socketpair():
    server_side, client_side = socket.socketpair()
    with client_side:
        client_side.sendall(b"abc\n")
        handle_client(server_side)
        data = client_side.makefile("rb").read()
    assert data == to_upper_reply("abc").encode()


def test_handle_client_without_newline_reports_error(capsys):
    server_side, client_side = socket.socketpair()
    with client_side:
        client_side.sendall(b"partial")
        client_side.shutdown(socket.SHUT_WR)
        handle_client(server_side)
        data = client_side.makefile("rb").read()
    assert data == b""
    assert "Client handling error" in capsys.readouterr().err


def test_send_line_round_trip():
    port, thread = _one_shot_server()
    reply = send_line("127.0.0.1", port, "round trip")
    thread.join(timeout=5)
    assert reply == to_upper_reply("round trip").rstrip("\n")


def test_serve_answers_several_clients():
    port = _free_port()
    threading.Thread(target=serve, args=("127.0.0.1", port), daemon=True).start()
    reply = None
    for _ in range(100):
        try:
            reply = send_line("127.0.0.1", port, "first")
            break
        except ConnectionRefusedError:
            time.sleep(0.05)
    assert reply == to_upper_reply("first").rstrip("\n")
    assert send_line("127.0.0.1", port, "second") == to_upper_reply("second").rstrip("\n")


def test_client_main_prints_reply(monkeypatch, capsys):
    port, thread = _one_shot_server()
    monkeypatch.setattr("sys.stdin", io.StringIO("hi there\n"))
    code = client_main(["--host", "127.0.0.1", "--port", str(port)])
    thread.join(timeout=5)
    out = capsys.readouterr().out
    assert code == 0
    assert "Server response: " + to_upper_reply("hi there").rstrip("\n") in out


def test_client_main_refused_connection(monkeypatch, capsys):
    port = _free_port()
    monkeypatch.setattr("sys.stdin", io.StringIO("x\n"))
    assert client_main(["--host", "127.0.0.1", "--port", str(port)]) == 1
    assert "Client error" in capsys.readouterr().err


def test_server_main_port_in_use(capsys):
    with socket.create_server(("127.0.0.1", 0)) as busy:
        port = busy.getsockname()[1]
        assert server_main(["--host", "127.0.0.1", "--port", str(port)]) == 1
    assert "Server error" in capsys.readouterr().err


@pytest.mark.parametrize("line", ["a", "Zz", "already UPPER", "tab\there"])
def test_reply_is_idempotent_on_body(line):
    body = to_upper_reply(line).rstrip("\n").partition(": ")[2]
    assert to_upper_reply(body) == to_upper_reply(line)