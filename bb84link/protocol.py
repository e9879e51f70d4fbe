"""Core BB84 key-exchange steps: base comparison, sifting, parity checks and QBER."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

BLOCK_SIZE = 4

RECTILINEAR = "+"
DIAGONAL = "x"


def compute_parity(bits: Iterable[str]) -> str:
    """Return '1' if the bits hold an odd number of '1' characters, else '0'."""
    odd = sum(1 for bit in bits if bit == "1") % 2
    return "1" if odd else "0"


def random_basis(rng: Optional[random.Random] = None) -> str:
    """Pick a measurement basis: '+' (rectilinear) or 'x' (diagonal)."""
    source = rng if rng is not None else random
    return RECTILINEAR if source.getrandbits(1) else DIAGONAL


def _check_same_length(first: str, second: str, what: str) -> None:
    if len(first) != len(second):
        raise ValueError(
            f"{what} differ in length: {len(first)} != {len(second)}"
        )


def match_mask(sent_bases: str, received_bases: str) -> str:
    """Return a mask with '1' wherever both parties chose the same basis."""
    _check_same_length(sent_bases, received_bases, "base strings")
    return "".join(
        "1" if sent == received else "0"
        for sent, received in zip(sent_bases, received_bases)
    )


def sift(bits: str, mask: str) -> str:
    """Keep only the bits whose mask position is '1'."""
    _check_same_length(bits, mask, "bits and mask")
    return "".join(bit for bit, keep in zip(bits, mask) if keep == "1")


def _masked_blocks(bits: str, mask: str, block_size: int) -> Iterator[List[int]]:
    """Yield, per block, the positions inside it that belong to the sifted key."""
    _check_same_length(bits, mask, "bits and mask")
    if block_size < 1:
        raise ValueError(f"block size must be positive, got {block_size}")
    for start in range(0, len(bits), block_size):
        end = min(start + block_size, len(bits))
        yield [pos for pos in range(start, end) if mask[pos] == "1"]


def block_parities(bits: str, mask: str, block_size: int = BLOCK_SIZE) -> str:
    """Parity of the sifted bits in every block; empty blocks give '0'."""
    return "".join(
        compute_parity(bits[pos] for pos in positions)
        for positions in _masked_blocks(bits, mask, block_size)
    )


def correct_errors(
    bits: str,
    mask: str,
    read_parity: Callable[[], str],
    block_size: int = BLOCK_SIZE,
) -> str:
    """Compare block parities with the remote ones and fix single-bit blocks.

    ``read_parity`` is called once for every block that holds at least one
    sifted bit; blocks with none are skipped without reading.  A block whose
    parity disagrees is corrected only when it holds exactly one sifted bit.
    """
    corrected = list(bits)
    for positions in _masked_blocks(bits, mask, block_size):
        if not positions:
            continue
        remote = read_parity()
        local = compute_parity(corrected[pos] for pos in positions)
        if remote != local and len(positions) == 1:
            pos = positions[0]
            corrected[pos] = "1" if corrected[pos] == "0" else "0"
    return "".join(corrected)


@dataclass(frozen=True)
class QberReport:
    """Quantum bit error rate over the sifted positions."""

    errors: int
    sifted: int

    @property
    def percent(self) -> float:
        return self.errors / self.sifted * 100.0 if self.sifted > 0 else 0.0

    def format(self) -> str:
        return (
            f"QBER: {self.percent:.2f}% "
            f"({self.errors} errors out of {self.sifted} sifted bits)"
        )


def measure_qber(bits: str, expected_bits: str, mask: str) -> QberReport:
    """Count mismatches between local and expected bits at sifted positions."""
    _check_same_length(bits, mask, "bits and mask")
    _check_same_length(expected_bits, mask, "expected bits and mask")
    sifted = 0
    errors = 0
    for bit, expected, keep in zip(bits, expected_bits, mask):
        if keep == "1":
            sifted += 1
            if bit != expected:
                errors += 1
    return QberReport(errors=errors, sifted=sifted)