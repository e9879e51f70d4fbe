"""Receiver side: reads detector bits, picks bases and reconciles with the sender."""

from __future__ import annotations

import argparse
import random
import socket
import sys
from dataclasses import dataclass

import serial

from bb84link.alice import DEFAULT_KEY_LENGTH, DEFAULT_PORT, recv_exactly
from bb84link.protocol import QberReport, correct_errors, measure_qber, random_basis, sift

DEFAULT_SERIAL_PORT = "/dev/ttyACM0"
DEFAULT_HOST = "192.168.2.1"


@dataclass(frozen=True)
class BobResult:
    """Outcome of one exchange on the receiving side."""

    mask: str
    sifted_key: str
    corrected_key: str
    report: QberReport


def read_detector_bits(stream, count):
    """Read ``count`` '0'/'1' characters from the detector, ignoring anything else."""
    bits = []
    while len(bits) < count:
        chunk = stream.read(1)
        if not chunk:
            raise EOFError(f"detector stream ended after {len(bits)} of {count} bits")
        char = chunk.decode("latin-1") if isinstance(chunk, bytes) else chunk
        if char in ("0", "1"):
            bits.append(char)
    return "".join(bits)


def choose_bases(count, rng=None):
    """Choose a random basis for every detected bit."""
    rng = rng or random.Random()
    return "".join(random_basis(rng) for _ in range(count))


def exchange(sock, bits, bases):
    """Send bases, receive mask, expected bits and parities, and correct errors."""
    if len(bits) != len(bases):
        raise ValueError("bits and bases must have the same length")

    def recv_char():
        return recv_exactly(sock, 1).decode("latin-1")

    sock.sendall(bases.encode("ascii"))
    mask = recv_exactly(sock, len(bases)).decode("latin-1")
    try:
        expected = "".join(recv_char() if keep == "1" else "x" for keep in mask)
    except ConnectionError as exc:
        raise ConnectionError("error receiving expected bit") from exc
    corrected = correct_errors(bits, mask, recv_char)
    return BobResult(
        mask=mask,
        sifted_key=sift(bits, mask),
        corrected_key=sift(corrected, mask),
        report=measure_qber(corrected, expected, mask),
    )


def run(serial_port=DEFAULT_SERIAL_PORT, host=DEFAULT_HOST, port=DEFAULT_PORT,
        key_length=DEFAULT_KEY_LENGTH, rng=None):
    """Collect detector bits, reconcile with the sender and print the result."""
    with serial.Serial(serial_port, baudrate=115200) as detector, \
            socket.create_connection((host, port)) as sock:
        print("Connected to Alice")
        bits = read_detector_bits(detector, key_length)
        result = exchange(sock, bits, choose_bases(key_length, rng))
    print(f"Final key (sifted):\n{result.sifted_key}")
    print(f"Corrected key:\n{result.corrected_key}")
    print(result.report.format())
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the receiving side of a key exchange.")
    parser.add_argument("--serial-port", default=DEFAULT_SERIAL_PORT)
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--key-length", type=int, default=DEFAULT_KEY_LENGTH)
    args = parser.parse_args(argv)
    try:
        run(args.serial_port, args.host, args.port, args.key_length)
    except (OSError, EOFError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())