"""Sliding-window file sender over UDP."""

from __future__ import annotations

import os
import socket
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO

from udpwindow.protocol import (
    INT_SIZE,
    MAX_MTU,
    ProtocolError,
    format_timestamp,
    pack_int,
    split_chunks,
    unpack_int,
)

RECV_TIMEOUT = 5.0
MAX_RETRIES = 5
USAGE = "Usage: <SERVER IP> <SERVER PORT> <MTU> <WINSZ <INFILE PATH> <OUTFILE PATH>"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for one file transfer."""

    ip: str
    port: int
    mtu: int
    winsz: int
    infile: str
    outfile: str


def parse_args(argv: list[str]) -> ClientConfig:
    """Build a configuration from command-line arguments."""
    if len(argv) < 6:
        raise ValueError(USAGE)
    ip, port_text, mtu_text, winsz_text, infile, outfile = argv[:6]
    try:
        port, mtu, winsz = int(port_text), int(mtu_text), int(winsz_text)
    except ValueError as exc:
        raise ValueError(USAGE) from exc
    if mtu > MAX_MTU:
        raise ValueError("MTU must not exceed 32000")
    if mtu < 1:
        raise ValueError("MTU must be positive")
    if port < 1024 or port > 65536:
        raise ValueError("Invalid Port Range")
    if winsz < 1:
        raise ValueError("Window size must be positive")
    return ClientConfig(ip, port, mtu, winsz, infile, outfile)


class TransferClient:
    """Sends one file through a connected datagram socket."""

    def __init__(self, config: ClientConfig, sock, out: TextIO | None = None) -> None:
        self.config = config
        self.sock = sock
        self.out = out if out is not None else sys.stdout
        self._failures = 0

    def send_file(self) -> int:
        """Transfer the configured file; return the number of packets sent."""
        cfg = self.config
        try:
            data = Path(cfg.infile).read_bytes()
        except OSError as exc:
            raise FileNotFoundError("File does not exist") from exc

        self.sock.settimeout(RECV_TIMEOUT)
        self.sock.send(pack_int(len(data)))
        try:
            self.sock.recv(cfg.mtu)
        except OSError as exc:
            raise ProtocolError("Cannot detect server") from exc

        self.sock.send(os.fsencode(cfg.outfile))
        stamp = format_timestamp(datetime.now())
        chunks = split_chunks(data, cfg.mtu)
        self.sock.send(pack_int(len(chunks)))
        self._transfer(chunks, stamp)
        return len(chunks)

    def _transfer(self, chunks: list[bytes], stamp: str) -> None:
        if not chunks:
            return
        winsz = self.config.winsz
        left, right = 1, winsz + 1
        remaining = len(chunks)
        pending: list[int] = []
        self._failures = 0
        while True:
            if left == right and not pending:
                right += winsz
            if (left == right and pending) or remaining == 0:
                for seq in pending:
                    self._resend(seq, chunks)
                    self._log(stamp, "ACK", seq, right)
                pending.clear()
                right += winsz
            if remaining == 0:
                break
            self._send_packet(left, chunks[left - 1])
            self._log(stamp, "DATA", left, right)
            if self._recv_ack() == -1:
                pending.append(left)
                self._failures += 1
            else:
                self._failures = 0
                self._log(stamp, "ACK", left, right)
            left += 1
            remaining -= 1

    def _resend(self, seq: int, chunks: list[bytes]) -> None:
        self._send_packet(seq, chunks[seq - 1])
        ack = self._recv_ack()
        while ack == -1:
            self._send_packet(seq, chunks[seq - 1])
            ack = self._recv_ack()
            self._failures += 1
            if self._failures > MAX_RETRIES:
                raise ProtocolError("Reached max re-transmission limit")
        self._failures = 0

    def _send_packet(self, seq: int, payload: bytes) -> None:
        self.sock.send(pack_int(seq))
        self.sock.send(payload)

    def _recv_ack(self) -> int:
        try:
            return unpack_int(self.sock.recv(INT_SIZE))
        except OSError as exc:
            raise ProtocolError("Cannot detect server") from exc

    def _log(self, stamp: str, kind: str, seq: int, right: int) -> None:
        winsz = self.config.winsz
        print(
            f"{stamp}, {kind}, {seq}, {right - 1}, {seq + 1}, {right + winsz - 1}",
            file=self.out,
        )


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for the sender."""
    args = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        try:
            sock.connect((config.ip, config.port))
        except (OSError, OverflowError):
            print("No response from server.", file=sys.stderr)
            return 1
        try:
            TransferClient(config, sock).send_file()
        except FileNotFoundError as exc:
            print(exc, file=sys.stderr)
            return 0
        except ProtocolError as exc:
            print(exc, file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())