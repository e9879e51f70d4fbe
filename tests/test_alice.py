import random
import socket

import pytest

from bb84link.alice import AliceSession, generate_test_data, recv_exactly
from bb84link.protocol import block_parities, match_mask, sift


def _read_all(sock):
    data = bytearray()
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            return bytes(data)
        data.extend(chunk)


def test_generate_test_data_all_zero_bits():
    bits, bases = generate_test_data(64, random.Random(1))
    assert bits == "0" * 64
    assert len(bases) == 64
    assert set(bases) <= {"+", "x"}


def test_generate_test_data_is_seedable():
    first_bits, first_bases = generate_test_data(32, random.Random(5))
    second_bits, second_bases = generate_test_data(32, random.Random(5))
    assert first_bits == second_bits == "0" * 32
    assert first_bases == second_bases
    assert len(first_bases) == 32
    assert set(first_bases) <= {"+", "x"}
    seen = {generate_test_data(32, random.Random(seed))[1] for seed in range(8)}
    assert len(seen) > 1


def test_session_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        AliceSession("01", "+")


def test_recv_exactly_reads_all():
    a, b = socket.socketpair()
    with a, b:
        a.sendall(b"abc")
        a.close()
        assert recv_exactly(b, 3) == b"abc"


def test_recv_exactly_raises_on_short_read():
    a, b = socket.socketpair()
    with a, b:
        a.sendall(b"ab")
        a.close()
        with pytest.raises(ConnectionError):
            recv_exactly(b, 4)


def test_handle_sends_mask_sifted_bits_and_parities():
    bits, bases = "1101", "+x+x"
    session = AliceSession(bits, bases)
    alice_end, bob_end = socket.socketpair()
    with alice_end, bob_end:
        bob_end.sendall(b"++++")
        sifted = session.handle(alice_end)
        alice_end.close()
        wire = _read_all(bob_end)
    mask = match_mask(bases, "++++")
    assert session.mask == mask
    assert sifted == sift(bits, mask)
    assert wire == (mask + sift(bits, mask) + block_parities(bits, mask)).encode()
    assert wire == b"1010101"


def test_handle_raises_when_bases_cut_short():
    session = AliceSession("0000", "++++")
    alice_end, bob_end = socket.socketpair()
    with alice_end, bob_end:
        bob_end.sendall(b"++")
        bob_end.shutdown(socket.SHUT_WR)
        with pytest.raises(ConnectionError):
            session.handle(alice_end)