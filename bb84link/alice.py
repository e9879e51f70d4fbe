"""Sender side: holds the transmitted bits and bases and answers the receiver."""

from __future__ import annotations

import argparse
import random
import socket

from bb84link.protocol import block_parities, match_mask, random_basis, sift

DEFAULT_PORT = 9000
DEFAULT_KEY_LENGTH = 512


def generate_test_data(key_length=DEFAULT_KEY_LENGTH, rng=None):
    """Return (bits, bases); the test transmitter sends only zeros."""
    rng = rng or random.Random()
    return "0" * key_length, "".join(random_basis(rng) for _ in range(key_length))


def recv_exactly(conn, size):
    """Read exactly ``size`` bytes or raise ConnectionError."""
    data = bytearray()
    while len(data) < size:
        chunk = conn.recv(size - len(data))
        if not chunk:
            raise ConnectionError(f"connection closed after {len(data)} of {size} bytes")
        data += chunk
    return bytes(data)


class AliceSession:
    """One key exchange from the sender's side."""

    def __init__(self, bits, bases):
        if len(bits) != len(bases):
            raise ValueError("bits and bases must have the same length")
        self.bits = bits
        self.bases = bases
        self.mask = None

    def handle(self, conn):
        """Run the exchange over ``conn`` and return the sifted key."""
        received = recv_exactly(conn, len(self.bases)).decode("latin-1")
        self.mask = match_mask(self.bases, received)
        sifted = sift(self.bits, self.mask)
        conn.sendall(self.mask.encode("ascii"))
        conn.sendall(sifted.encode("ascii"))
        conn.sendall(block_parities(self.bits, self.mask).encode("ascii"))
        return sifted


def serve(host="", port=DEFAULT_PORT, key_length=DEFAULT_KEY_LENGTH, rng=None):
    """Wait for one receiver, run the exchange and return the sifted key."""
    session = AliceSession(*generate_test_data(key_length, rng))
    with socket.create_server((host, port)) as server:
        print("Waiting for Bob to connect...")
        conn, _ = server.accept()
        with conn:
            print("Bob connected!")
            sifted = session.handle(conn)
    print(f"Sifted key: {sifted}")
    return sifted


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the sending side of a key exchange.")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--key-length", type=int, default=DEFAULT_KEY_LENGTH)
    args = parser.parse_args(argv)
    serve(args.host, args.port, args.key_length)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())