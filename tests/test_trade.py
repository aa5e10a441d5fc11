import os, random
import pytest
from conftest import N, T, random_modulus
from delayproof.errors import MalformedInput, MalformedProof
from delayproof.utils import keccak256
from delayproof.vdf.blob import decode_proof
from delayproof.vdf.trade import generate_seed, generate_vdf, generate_x, is_valid_vdf


def flip(blob: str, i: int) -> str:
    # replace the hex digit at body position `i` with a different one
    body = blob[2:]
    digit = "0123456789abcdef"[(int(body[i], 16) + 1) % 16]
    return "0x" + body[:i] + digit + body[i + 1 :]


class TestSeed:
    def test_layout(self, trade):
        expected = keccak256(
            b"\x11" * 20
            + (3).to_bytes(32, "big")
            + b"\x22" * 20
            + b"\x33" * 20
            + b"\x44" * 20
            + (123456789012345678).to_bytes(32, "big")
            + (987654321098765432).to_bytes(32, "big")
        )
        assert generate_seed(**trade) == "0x" + expected.hex()

    def test_deterministic(self, trade):
        assert generate_seed(**trade) == generate_seed(**trade)

    def test_path_order_matters(self, trade):
        reordered = dict(trade, path=list(reversed(trade["path"])))
        assert generate_seed(**trade) != generate_seed(**reordered)

    def test_input_forms_agree(self, trade):
        same = dict(
            trade,
            origin=bytes.fromhex("11" * 20),
            path=[p[2:] for p in trade["path"]],
            known_qty_in=str(trade["known_qty_in"]),
            known_qty_out=int(trade["known_qty_out"]),
        )
        assert generate_seed(**trade) == generate_seed(**same)

    def test_empty_path(self, trade):
        seed = generate_seed(trade["origin"], [], 0, 0)
        assert len(seed) == 66

    @pytest.mark.parametrize(
        "override",
        [
            {"known_qty_in": -1},
            {"known_qty_out": "1.5"},
            {"known_qty_in": "lots"},
            {"path": "0x" + "22" * 20},
            {"origin": "not hex"},
        ],
    )
    def test_rejects(self, trade, override):
        with pytest.raises(MalformedInput):
            generate_seed(**dict(trade, **override))


class TestX:
    def test_layout(self, trade, block_hash):
        seed = generate_seed(**trade)
        h = keccak256(bytes.fromhex(seed[2:]) + bytes.fromhex(block_hash[2:]))
        assert generate_x(N, seed, block_hash) == int.from_bytes(h, "big") % N

    def test_in_range(self, trade):
        seed = generate_seed(**trade)
        for _ in range(32):
            x = generate_x(N, seed, os.urandom(32))
            assert 0 <= x < N

    def test_depends_on_block_hash(self, trade, block_hash):
        seed = generate_seed(**trade)
        assert generate_x(N, seed, block_hash) != generate_x(N, seed, "0x" + "cd" * 32)


class TestGenerateVdf:
    @pytest.fixture
    def blob(self, vdf_args):
        return generate_vdf(block_number=1234567, **vdf_args)

    def test_length(self, blob):
        assert blob.startswith("0x")
        assert len(blob[2:]) == 192

    def test_deterministic(self, vdf_args, blob):
        assert generate_vdf(block_number=1234567, **vdf_args) == blob

    def test_fields(self, blob):
        proof = decode_proof(blob)
        assert proof.block_number == 1234567
        assert 0 <= proof.pi < N
        assert 0 <= proof.y < N

    def test_complete(self, vdf_args, blob):
        assert is_valid_vdf(proof=blob, **vdf_args)

    def test_flipping_pi_or_y_rejects(self, vdf_args, blob):
        for i in range(128):
            assert not is_valid_vdf(proof=flip(blob, i), **vdf_args), i

    def test_block_number_not_bound(self, vdf_args, blob):
        # blockNumber is bookkeeping only; the proof still verifies
        assert is_valid_vdf(proof=flip(blob, 191), **vdf_args)

    def test_wrong_block_hash_rejects(self, vdf_args, blob):
        args = dict(vdf_args, block_hash="0x" + "cd" * 32)
        assert not is_valid_vdf(proof=blob, **args)

    def test_wrong_context_rejects(self, vdf_args, blob):
        assert not is_valid_vdf(proof=blob, **dict(vdf_args, known_qty_in=1))
        assert not is_valid_vdf(proof=blob, **dict(vdf_args, T=T + 1))

    def test_malformed_proof_raises(self, vdf_args, blob):
        with pytest.raises(MalformedProof):
            is_valid_vdf(proof=blob[:-2], **vdf_args)

    def test_progress(self, vdf_args):
        seen = []
        generate_vdf(block_number=1, on_progress=seen.append, **vdf_args)
        firsts = [i for i, v in enumerate(seen) if v == 0]
        assert len(firsts) == 2
        assert seen[firsts[1] - 1] == T - 1
        assert seen[-1] == T - 1


def test_random_scenario():
    n = random_modulus()
    args = dict(
        n=n,
        T=random.randrange(300, 1200),
        origin="0x" + os.urandom(20).hex(),
        path=["0x" + os.urandom(20).hex() for _ in range(3)],
        known_qty_in=int.from_bytes(os.urandom(32), "big") % 10**18,
        known_qty_out=int.from_bytes(os.urandom(32), "big") % 10**18,
        block_hash="0x" + os.urandom(32).hex(),
    )
    blob = generate_vdf(block_number=random.randrange(4_000_000), **args)
    assert len(blob) == 194
    assert is_valid_vdf(proof=blob, **args)


@pytest.mark.parametrize(
    "override",
    [
        {"n": 1 << 300},
        {"n": 1},
        {"T": 0},
        {"block_number": -1},
        {"block_number": 1 << 256},
        {"known_qty_in": -5},
    ],
)
def test_generate_fails_before_evaluation(vdf_args, override):
    seen = []
    args = dict(vdf_args, block_number=1, on_progress=seen.append)
    with pytest.raises(MalformedInput):
        generate_vdf(**dict(args, **override))
    assert seen == []
