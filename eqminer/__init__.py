"""Equihash solving and verification, with BLAKE2b, SHA-256, RIPEMD-160, 256-bit arithmetic and fee-rate helpers."""

__version__ = "0.1.0"