import io

import pytest

from udpwindow.client import ClientConfig, TransferClient, main, parse_args
from udpwindow.protocol import ProtocolError, pack_int


class FakeSocket:
    def __init__(self, responses):
        self.responses = list(responses)
        self.sent = []
        self.timeout = None

    def settimeout(self, value):
        self.timeout = value

    def send(self, data):
        self.sent.append(bytes(data))
        return len(data)

    def recv(self, size):
        if not self.responses:
            raise TimeoutError("timed out")
        return self.responses.pop(0)


def make_config(tmp_path, data, mtu=4, winsz=2):
    infile = tmp_path / "in.bin"
    infile.write_bytes(data)
    return ClientConfig("127.0.0.1", 9000, mtu, winsz, str(infile), "out.txt")


def events(out):
    return [tuple(line.split(", ")[1:3]) for line in out.getvalue().splitlines()]


def test_parse_args_valid():
    config = parse_args(["127.0.0.1", "9000", "512", "4", "a.txt", "b.txt"])
    assert config == ClientConfig("127.0.0.1", 9000, 512, 4, "a.txt", "b.txt")


def test_parse_args_too_few():
    with pytest.raises(ValueError, match="Usage"):
        parse_args(["127.0.0.1", "9000"])


def test_parse_args_mtu_limit():
    with pytest.raises(ValueError, match="MTU must not exceed 32000"):
        parse_args(["127.0.0.1", "9000", "32001", "4", "a", "b"])


@pytest.mark.parametrize("port", ["80", "65537"])
def test_parse_args_port_range(port):
    with pytest.raises(ValueError, match="Invalid Port Range"):
        parse_args(["127.0.0.1", port, "512", "4", "a", "b"])


def test_send_file_all_acked(tmp_path):
    config = make_config(tmp_path, b"abcdefghij")
    sock = FakeSocket([pack_int(10), pack_int(1), pack_int(2), pack_int(3)])
    out = io.StringIO()
    count = TransferClient(config, sock, out).send_file()
    assert count == 3
    assert sock.sent == [
        pack_int(10), b"out.txt", pack_int(3),
        pack_int(1), b"abcd", pack_int(2), b"efgh", pack_int(3), b"ij",
    ]
    assert events(out) == [
        ("DATA", "1"), ("ACK", "1"),
        ("DATA", "2"), ("ACK", "2"),
        ("DATA", "3"), ("ACK", "3"),
    ]
    assert sock.timeout == 5.0


def test_send_file_retransmits_dropped_packet(tmp_path):
    config = make_config(tmp_path, b"abcdefgh", mtu=4, winsz=5)
    sock = FakeSocket([pack_int(8), pack_int(-1), pack_int(2), pack_int(1)])
    out = io.StringIO()
    TransferClient(config, sock, out).send_file()
    assert sock.sent[3:] == [
        pack_int(1), b"abcd", pack_int(2), b"efgh", pack_int(1), b"abcd",
    ]
    assert events(out) == [("DATA", "1"), ("DATA", "2"), ("ACK", "2"), ("ACK", "1")]


def test_send_file_gives_up_after_retries(tmp_path):
    config = make_config(tmp_path, b"abc")
    sock = FakeSocket([pack_int(3)] + [pack_int(-1)] * 20)
    with pytest.raises(ProtocolError, match="max re-transmission"):
        TransferClient(config, sock, io.StringIO()).send_file()


def test_send_file_no_server(tmp_path):
    config = make_config(tmp_path, b"abc")
    with pytest.raises(ProtocolError, match="Cannot detect server"):
        TransferClient(config, FakeSocket([]), io.StringIO()).send_file()


def test_send_file_missing_input(tmp_path):
    config = ClientConfig("127.0.0.1", 9000, 4, 2, str(tmp_path / "nope"), "out")
    sock = FakeSocket([])
    with pytest.raises(FileNotFoundError):
        TransferClient(config, sock, io.StringIO()).send_file()
    assert sock.sent == []


def test_main_usage_error():
    assert main(["127.0.0.1"]) == 1


def test_main_missing_file(tmp_path):
    args = ["127.0.0.1", "9000", "512", "4", str(tmp_path / "missing"), "out"]
    assert main(args) == 0