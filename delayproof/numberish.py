from decimal import Decimal
from typing import Any, Union
import re
import gmpy2
from delayproof.errors import MalformedInput

Numberish = Union[int, str, Decimal, float, Any]

# one optional sign, then an unsigned body
DECIMAL_BODY = re.compile(r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
HEX_BODY = re.compile(r"[0-9a-fA-F]+")
# largest decimal exponent accepted, well past any RSA modulus in use
MAX_EXPONENT = 4096


def _from_decimal(d: Decimal, raw: Any) -> int:
    if not d.is_finite():
        raise MalformedInput(f"not a finite number: {raw!r}")
    if d.adjusted() > MAX_EXPONENT:
        raise MalformedInput(f"number too large: {raw!r}")
    if d != d.to_integral_value():
        raise MalformedInput(f"not an integer: {raw!r}")
    return int(d)


def _from_str(s: str, raw: Any) -> int:
    s = s.strip()
    sign = 1
    if s[:1] in ("-", "+"):
        sign, s = (-1 if s[0] == "-" else 1), s[1:]
    if s[:2] in ("0x", "0X"):
        if not HEX_BODY.fullmatch(s[2:]):
            raise MalformedInput(f"not a hex integer: {raw!r}")
        return sign * int(s[2:], 16)
    if not DECIMAL_BODY.fullmatch(s):
        raise MalformedInput(f"not a number: {raw!r}")
    return sign * _from_decimal(Decimal(s), raw)


def to_integer(x: Numberish) -> int:
    if isinstance(x, bool):
        raise MalformedInput(f"booleans are not numbers: {x!r}")
    if isinstance(x, int):
        return x
    if isinstance(x, type(gmpy2.mpz(0))):
        return int(x)
    if isinstance(x, Decimal):
        return _from_decimal(x, x)
    if isinstance(x, float):
        if not x.is_integer():
            raise MalformedInput(f"not an integer: {x!r}")
        return int(x)
    if isinstance(x, (bytes, bytearray)):
        raise MalformedInput("raw bytes are not numbers, pass a hex string")
    return _from_str(str(x), x)


def to_natural(x: Numberish) -> int:
    n = to_integer(x)
    if n < 0:
        raise MalformedInput(f"expected a non-negative integer, got {n}")
    return n


def to_positive(x: Numberish) -> int:
    n = to_integer(x)
    if n <= 0:
        raise MalformedInput(f"expected a positive integer, got {n}")
    return n
