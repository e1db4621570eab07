# caesarfile/algo/caesar.py
"""Byte-wise additive (Caesar) cipher over the 256-value byte alphabet.

Every byte is shifted by the same key modulo 256. This is obfuscation, not
encryption in any security sense: there are only 256 keys.
"""
import operator
from enum import Enum
import numpy as np

KEY_SPACE = 256

class Direction(str, Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

def normalize_key(key: int) -> int:
    """Map any integer key to its residue in [0, 255]; -50 and 206 give the same value."""
    if isinstance(key, bool):
        raise TypeError("key must be an integer, not bool")
    key = operator.index(key)
    # Python's % takes the sign of the divisor, so this is never negative
    return key % KEY_SPACE

def _check_byte(byte: int) -> int:
    byte = operator.index(byte)
    if not 0 <= byte < KEY_SPACE:
        raise ValueError(f"byte out of range 0..255: {byte}")
    return byte

def encrypt_byte(byte: int, key: int) -> int:
    return (_check_byte(byte) + normalize_key(key)) % KEY_SPACE

def decrypt_byte(byte: int, key: int) -> int:
    return (_check_byte(byte) - normalize_key(key) + KEY_SPACE) % KEY_SPACE

def transform_byte(byte: int, key: int, direction: Direction = Direction.ENCRYPT) -> int:
    if Direction(direction) is Direction.DECRYPT:
        return decrypt_byte(byte, key)
    return encrypt_byte(byte, key)

def transform_block(data: bytes, key: int, direction: Direction = Direction.ENCRYPT) -> bytes:
    """Apply transform_byte to every byte of data, vectorised.

    Same result as bytes(transform_byte(b, key, direction) for b in data).
    """
    k = normalize_key(key)
    decrypt = Direction(direction) is Direction.DECRYPT
    if not data:
        return b""
    # int16 holds the widest intermediate (255 + 255 or 0 - 255 + 256)
    arr = np.frombuffer(data, dtype=np.uint8).astype(np.int16)
    if decrypt:
        out = (arr - k + KEY_SPACE) % KEY_SPACE
    else:
        out = (arr + k) % KEY_SPACE
    return out.astype(np.uint8).tobytes()

def encrypt_bytes(data: bytes, key: int) -> bytes:
    return transform_block(data, key, Direction.ENCRYPT)

def decrypt_bytes(data: bytes, key: int) -> bytes:
    return transform_block(data, key, Direction.DECRYPT)
