"""BB84 key sifting, parity-based error correction and QBER measurement over TCP."""

__version__ = "0.1.0"
__all__ = ["protocol", "alice", "bob"]