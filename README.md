# lineservers

A handful of small TCP servers and matching clients that talk a simple
line protocol: every request is one line ending in `\n`, and every reply
is one line ending in `\n`. Text is sent as UTF-8.

Every command takes `--host` and `--port`. Servers listen on `0.0.0.0`
by default and clients connect to `127.0.0.1`; the default port is `1234`.

No third-party libraries are needed.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The services

### Upper-casing (`lineservers.upper`)

A blocking server that accepts one client at a time. It reads a single
line and answers with the line's length in bytes, a colon and the line
with its ASCII letters in upper case, for example `5: HELLO`. It then
closes that connection and waits for the next client. Errors while
serving a client are printed to standard error and the server carries on.

```
lineservers-upper-server
lineservers-upper-client
```

The client prompts for one line on standard input, sends it and prints
`Server response: ` followed by the reply.

From Python:

- `to_upper_reply(line)` builds the reply for one line, newline included.
- `handle_client(conn)` serves one accepted socket and closes it.
- `serve(host, port)` runs the accept loop forever.
- `send_line(host, port, message)` sends one line and returns the reply
  without its newline.
- `server_main(argv=None)` and `client_main(argv=None)` are the two commands.

### Maximum of numbers (`lineservers.maxnum`)

An asyncio server that handles many clients at once. Each line holds
whitespace-separated integers; the server answers with the largest of
them (`Максимум: N`). Reading stops at the first token that is not an
integer or lies outside the signed 32-bit range. A line with no numbers
gets the reply `Ошибка: нет чисел для обработки` and the server then
closes that connection.

```
lineservers-max-server
lineservers-max-client
```

The client loops: it prompts for numbers, sends them and prints the reply.
Type `exit`, or end standard input, to quit.

From Python: `parse_numbers(line)`, `max_reply(line)`,
`handle_session(reader, writer)`, the coroutine `serve(host, port)` and
`run_client(host, port, stdin, stdout)`.

### Delayed timer (`lineservers.timer`)

An asyncio server that understands one command, `timer N` with a positive
number of seconds. It answers at once with `Ready in N sec`, waits N
seconds, then sends `Done!` and reads the next command. Anything else,
including `timer` with no positive delay, gets `Unknown command`.

```
lineservers-timer-server
lineservers-timer-client
```

The client prompts for a command and prints each reply as `Server: ...`.
After any command that begins with `timer` it also waits for and prints a
second reply. Type `exit`, or end standard input, to quit.

From Python: `parse_command(line)` (returns a `Command` with `name` and
`delay`; a missing delay is 0), `handle_session(reader, writer)`, the
coroutine `serve(host, port)` and `run_client(host, port, stdin, stdout)`.

### Thread-pool processor (`lineservers.pool`)

`ThreadPoolServer(host, port, thread_pool_size)` starts listening and
starts its worker threads at once; each thread accepts connections and
handles them. For each connection it reads one line, answers
`Processed: <line>` and closes the connection. The bound address is in
`address`. `run()` blocks until the worker threads finish, which they do
after `close()` is called.

`AsyncClient(host, port)` connects on creation; `send_request(request)`
sends one line and returns the reply without its newline, and `close()`
releases the connection. `processed_reply(line)` builds the server's reply
for one line.

```
lineservers-pool-demo
```

The demo starts a server (four worker threads by default, `--threads`
changes that), then after one second a client on `127.0.0.1` that sends
`Hello`, `Multithreaded` and `Server` and prints each
`Server response: ...`. The server keeps running until interrupted.

## What it does not do

The servers have no way to be stopped over the network, keep no logs
beyond what they print, and have no configuration beyond the command-line
options shown above. Stop them with Ctrl-C.