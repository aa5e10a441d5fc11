from Crypto.Hash import keccak
from typing import Union
from delayproof.errors import MalformedInput
from delayproof.numberish import Numberish, to_natural

BytesLike = Union[bytes, bytearray, str]


def keccak256(x: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=x).digest()


def to_buffer(x: Union[BytesLike, int]) -> bytes:
    # hex strings (with or without 0x) and raw bytes pass through,
    # integers become their minimal big-endian encoding
    if isinstance(x, (bytes, bytearray)):
        return bytes(x)
    if isinstance(x, str):
        s = x[2:] if x[:2] in ("0x", "0X") else x
        if len(s) % 2 == 1:
            s = "0" + s
        try:
            return bytes.fromhex(s)
        except ValueError:
            raise MalformedInput(f"not a hex string: {x!r}") from None
    if isinstance(x, int) and not isinstance(x, bool):
        return int2bytes(to_natural(x))
    raise MalformedInput(f"cannot convert {type(x).__name__} to bytes")


def set_length_left(x: bytes, length: int) -> bytes:
    # zero pad on the left, keep the rightmost bytes when too long
    if len(x) >= length:
        return x[len(x) - length :]
    return b"\x00" * (length - len(x)) + x


def int2bytes(x: int) -> bytes:
    return int(x).to_bytes((int(x).bit_length() + 7) // 8, "big")


def bytes2int(x: bytes) -> int:
    return int.from_bytes(x, "big")


def word(x: Numberish, size: int = 32) -> bytes:
    # fixed-width big-endian encoding of a non-negative integer
    return set_length_left(int2bytes(to_natural(x)), size)


def fixed(x: Union[BytesLike, int], size: int) -> bytes:
    return set_length_left(to_buffer(x), size)


def to_hex(x: bytes) -> str:
    return "0x" + x.hex()
