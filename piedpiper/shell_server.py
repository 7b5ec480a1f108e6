"""Server of the masked remote shell: runs each client's commands."""

from __future__ import annotations

import argparse
import itertools
import socket
import subprocess
import sys
import threading
from contextlib import suppress
from pathlib import Path

from piedpiper.shell_common import (
    ACK_SIZE,
    CLOSE,
    MINLEN,
    OUTPUT_LIMIT,
    make_generator,
    mask,
)

PORT = 8000
SERVER_ACK = b"ack"


def matches_prefix(prefix: str, text: str) -> bool:
    """Whether ``text`` begins with ``prefix``."""
    return text.startswith(prefix)


def run_command(command: str, client_number: int) -> bytes:
    """Run ``command`` in a shell; return at most OUTPUT_LIMIT bytes of its output.

    The output passes through ``tmp_<client_number>.txt`` in the current
    directory, which is removed afterwards.
    """
    path = Path(f"tmp_{client_number}.txt")
    try:
        with path.open("w+b") as out:
            subprocess.run(command, shell=True, stdout=out, check=False)
            out.seek(0)
            return out.read(OUTPUT_LIMIT)
    finally:
        with suppress(OSError):
            path.unlink()


class ClientSession:
    """Serves one connected client until it sends the close command."""

    def __init__(self, connection: socket.socket, number: int) -> None:
        self.connection = connection
        self.number = number
        self._generator = make_generator()

    def _send(self, data: bytes) -> None:
        self.connection.sendall(mask(data, self._generator))

    def _receive_ack(self) -> None:
        self.connection.recv(ACK_SIZE)

    def _send_ack(self) -> None:
        self.connection.sendall(SERVER_ACK)

    def handle(self, command: str) -> bool:
        """Answer one command; return True when the session should end."""
        self._receive_ack()
        if matches_prefix(CLOSE, command):
            print("Exit Command")
            self._send(b"BYE")
            return True
        try:
            output = run_command(command, self.number)
        except OSError:
            print("Invalid file error")
            self._send(b"INV")
            return False
        if not output:
            print("Empty Command")
            self._send(b"EOP")
            self._receive_ack()
            return False
        self._send(output)
        self._receive_ack()
        return False

    def serve(self) -> None:
        """Read and answer commands until the client leaves; close the connection."""
        try:
            while True:
                data = self.connection.recv(MINLEN)
                if not data:
                    break
                command = mask(data, self._generator).decode("utf-8", errors="replace")
                print(f"Command is {command}")
                self._send_ack()
                if self.handle(command):
                    self._send_ack()
                    break
                self._send_ack()
        finally:
            self.connection.close()
        print(f"Client {self.number} has left the server")


def _session(connection: socket.socket, number: int) -> None:
    print(f"Client {number} has joined the server")
    ClientSession(connection, number).serve()


def serve(host: str = "", port: int = PORT) -> None:
    """Accept clients forever, each served in its own thread."""
    numbers = itertools.count(1)
    with socket.create_server((host, port), backlog=3) as listener:
        while True:
            connection, _ = listener.accept()
            threading.Thread(
                target=_session, args=(connection, next(numbers)), daemon=True
            ).start()


def main(argv: list[str] | None = None) -> int:
    """Run the server; returns the exit status."""
    parser = argparse.ArgumentParser(prog="shell-server")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port)
    except OSError as exc:
        print(f"bind failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())