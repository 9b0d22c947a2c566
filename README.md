# udpwindow

A small file transfer tool that sends a file over UDP, a window of packets at
a time. The server can be told to drop a share of incoming packets so you can
watch retransmission at work.

## Installation

```
pip install .
```

Install the test dependencies with `pip install .[test]`.

## Running the server

```
udpwindow-server <PORT> <DROP_PERCENT>
```

The server binds to `PORT` on all interfaces and accepts one transfer after
another until it is interrupted. For every data packet it draws a random number
from 0 to 100; if that number is not greater than `DROP_PERCENT`, the packet is
dropped and the server replies with a negative acknowledgement (`-1`).
Otherwise it keeps the payload and acknowledges the sequence number. It logs
every packet like this:

```
2024-01-01T12:00.00z DATA, 1
2024-01-01T12:00.00z ACK, 1
2024-01-01T12:00.00z DROP DATA, 2
2024-01-01T12:00.00z DROP ACK, 2
```

The server reads packets until it has accepted as many bytes as the file size
the client announced, then writes the packets to the outfile in sequence order.
If a packet is missing at that point it stops with `missing packet <n>`.

If the outfile path names directories that do not exist yet, the server creates
them. An existing outfile is opened without being truncated, so its data is
overwritten from the start.

## Sending a file

```
udpwindow-client <SERVER_IP> <SERVER_PORT> <MTU> <WINDOW_SIZE> <INFILE> <OUTFILE>
```

- `MTU` is the payload size of each data packet: from 1 to 32000.
- `SERVER_PORT` must be between 1024 and 65536.
- `WINDOW_SIZE` (at least 1) is how many packets are sent before the client
  goes back and resends the ones that were dropped.
- `OUTFILE` is the path that the server writes the file to.

The client first sends the file size and waits up to five seconds for the
server to echo it; if no reply comes, or any later acknowledgement times out,
it reports `Cannot detect server` and exits with status 1. If `INFILE` cannot
be read it reports `File does not exist`. A dropped packet is resent until it
is acknowledged; after more than five failures in a row the client gives up
with `Reached max re-transmission limit`. Every data packet and
acknowledgement is logged as:

```
<timestamp>, DATA, <seq>, <window end>, <next seq>, <next window end>
<timestamp>, ACK, <seq>, <window end>, <next seq>, <next window end>
```

## Using it from Python

- `udpwindow.client`: `parse_args` builds a `ClientConfig`;
  `TransferClient(config, sock, out)` sends the file through a connected
  datagram socket with `send_file()`, which returns the number of packets.
- `udpwindow.server`: `parse_args` builds a `ServerConfig`;
  `TransferServer(sock, drop_percent, rng, out)` receives one file with
  `serve_one()` (returning the outfile path) or keeps going with
  `serve_forever()`. `prepare_outfile` opens a path for writing, creating its
  parent directories.
- `udpwindow.protocol`: `pack_int` and `unpack_int` (little-endian signed
  32-bit), `split_chunks`, `format_timestamp` and `ProtocolError`.

## What it does not do

There is no checksumming, encryption or authentication, and the server handles
one client transfer at a time. The payload of a data packet the server receives
is limited to 4096 bytes.