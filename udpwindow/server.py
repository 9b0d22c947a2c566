"""UDP file receiver with simulated packet loss."""

from __future__ import annotations

import os
import random
import socket
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, TextIO

from udpwindow.protocol import (
    INT_SIZE,
    MAXLINE,
    ProtocolError,
    format_timestamp,
    pack_int,
    unpack_int,
)

USAGE = "Usage: <Port Number> <Droppc>."


@dataclass(frozen=True)
class ServerConfig:
    """Listening port and drop percentage."""

    port: int
    drop_percent: int


def parse_args(argv: list[str]) -> ServerConfig:
    """Build a configuration from command-line arguments."""
    if len(argv) < 2:
        raise ValueError(USAGE)
    try:
        return ServerConfig(int(argv[0]), int(argv[1]))
    except ValueError as exc:
        raise ValueError(USAGE) from exc


def prepare_outfile(path: str) -> BinaryIO:
    """Open ``path`` for writing without truncating, creating parent directories."""
    flags = os.O_RDWR | os.O_CREAT
    try:
        fd = os.open(path, flags, 0o644)
    except FileNotFoundError:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        fd = os.open(path, flags, 0o644)
    return os.fdopen(fd, "r+b")


class TransferServer:
    """Receives files sent by the sliding-window client."""

    def __init__(self, sock, drop_percent: int, rng=None, out: TextIO | None = None) -> None:
        self.sock = sock
        self.drop_percent = drop_percent
        self.rng = rng if rng is not None else random.Random()
        self.out = out if out is not None else sys.stdout

    def serve_one(self) -> str:
        """Receive one file and return the path it was written to."""
        raw, addr = self.sock.recvfrom(INT_SIZE)
        filesize = unpack_int(raw)
        self.sock.sendto(raw, addr)

        path_raw, addr = self.sock.recvfrom(MAXLINE)
        path = os.fsdecode(path_raw.split(b"\0", 1)[0])

        with prepare_outfile(path) as handle:
            stamp = format_timestamp(datetime.now())
            roll = self._roll()
            raw, addr = self.sock.recvfrom(INT_SIZE)
            count = unpack_int(raw)

            received: dict[int, bytes] = {}
            while filesize > 0:
                raw, addr = self.sock.recvfrom(INT_SIZE)
                seq = unpack_int(raw)
                payload, addr = self.sock.recvfrom(MAXLINE)
                if roll > self.drop_percent:
                    received[seq] = payload
                    self.sock.sendto(pack_int(seq), addr)
                    filesize -= len(payload)
                    self._log(stamp, "DATA", seq)
                    self._log(stamp, "ACK", seq)
                else:
                    self._log(stamp, "DROP DATA", seq)
                    self._log(stamp, "DROP ACK", seq)
                    self.sock.sendto(pack_int(-1), addr)
                roll = self._roll()

            for seq in range(1, count + 1):
                if seq not in received:
                    raise ProtocolError(f"missing packet {seq}")
                handle.write(received[seq])
        return path

    def serve_forever(self) -> None:
        """Receive files one after another until interrupted."""
        while True:
            self.serve_one()

    def _roll(self) -> int:
        return self.rng.randint(0, 100)

    def _log(self, stamp: str, kind: str, seq: int) -> None:
        print(f"{stamp} {kind}, {seq}", file=self.out)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for the receiver."""
    args = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError:
        print("Socket Error.", file=sys.stderr)
        return 1

    with sock:
        try:
            sock.bind(("", config.port))
        except (OSError, OverflowError):
            print("Bind failed.", file=sys.stderr)
            return 1
        try:
            TransferServer(sock, config.drop_percent).serve_forever()
        except KeyboardInterrupt:
            return 0
        except ProtocolError as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())