"""Client of the masked remote shell."""

from __future__ import annotations

import re
import socket
import sys

from piedpiper.shell_common import ACK_SIZE, OUTPUT_LIMIT, make_generator, mask, trim

USAGE = "Invalid Command.\nUsage ::\nshell-client [IP_ADDR] [PORT_NUM]"
CLIENT_ACK = b"Ack"


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def validate_arguments(argv: list[str]) -> tuple[str, int]:
    """Check the address and port arguments; return them trimmed and parsed."""
    args = list(argv)
    if len(args) != 2:
        raise ValueError(USAGE)
    host, port_text = trim(args[0]), trim(args[1])
    port = _atoi(port_text)
    if not 0 <= port <= 65535:
        raise ValueError("Invalid port number")
    if host.count(".") != 3:
        raise ValueError("Invalid IP address")
    return host, port


class ShellClient:
    """A connection to the shell server that runs masked commands."""

    def __init__(self, host: str, port: int | str) -> None:
        self._generator = make_generator()
        try:
            socket.inet_pton(socket.AF_INET, host)
        except OSError:
            raise ValueError("Invalid address/ Address not supported") from None
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((host, int(port)))
        except OSError as exc:
            sock.close()
            raise ConnectionError("Connection Failed") from exc
        self._socket = sock

    def _read_ack(self) -> None:
        self._socket.recv(ACK_SIZE)

    def _send_ack(self) -> None:
        self._socket.sendall(CLIENT_ACK)

    def send_command(self, command: str | bytes) -> str:
        """Run ``command`` on the server and return its output.

        Raises ConnectionAbortedError when the server ends the session.
        """
        data = command.encode("utf-8") if isinstance(command, str) else bytes(command)
        self._socket.sendall(mask(data, self._generator))
        self._read_ack()
        self._send_ack()
        reply = self._socket.recv(OUTPUT_LIMIT)
        if not reply:
            raise ConnectionResetError("connection closed by the server")
        output = mask(reply, self._generator)
        if output.startswith(b"BYE"):
            self._send_ack()
            raise ConnectionAbortedError("server closed the session")
        self._send_ack()
        self._read_ack()
        return output.decode("utf-8", errors="replace")

    def close(self) -> None:
        """Close the connection."""
        self._socket.close()

    def __enter__(self) -> ShellClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Interactive client: arguments are the server address and port."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        host, port = validate_arguments(args)
    except ValueError as exc:
        print(exc)
        return 0
    try:
        client = ShellClient(host, port)
    except (ValueError, OSError) as exc:
        print(exc)
        print("Error :: Unable to establish connection.", file=sys.stderr)
        return 1
    with client:
        print("Enter client Name : ", end="", flush=True)
        name = trim(sys.stdin.readline())
        while True:
            print(f"\033[1;33m<client:{name}>\033[0m ", end="", flush=True)
            line = sys.stdin.readline()
            if not line:
                print()
                return 0
            try:
                output = client.send_command(trim(line))
            except ConnectionAbortedError:
                print("Close connection message recieved.")
                return 0
            except OSError as exc:
                print(f"Error :: {exc}", file=sys.stderr)
                return 1
            print(output, end="")


if __name__ == "__main__":
    sys.exit(main())