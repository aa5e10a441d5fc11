import pytest
from Crypto.Util.number import getPrime
from delayproof.params import Parameters

N = Parameters.n
T = 1000


@pytest.fixture
def trade():
    return dict(
        origin="0x" + "11" * 20,
        path=["0x" + "22" * 20, "0x" + "33" * 20, "0x" + "44" * 20],
        known_qty_in=123456789012345678,
        known_qty_out="987654321098765432",
    )


@pytest.fixture
def block_hash():
    return "0x" + "ab" * 32


@pytest.fixture
def vdf_args(trade, block_hash):
    return dict(n=N, T=T, block_hash=block_hash, **trade)


def random_modulus(bits: int = 256) -> int:
    # fits the 32-byte proof words; the factors are thrown away
    while True:
        n = getPrime(bits // 2) * getPrime(bits // 2)
        if n.bit_length() <= 256:
            return n
