from typing import Optional, Sequence
import logging
from delayproof.errors import MalformedInput
from delayproof.numberish import Numberish, to_natural
from delayproof.params import Parameters
from delayproof.progress import ProgressCallback
from delayproof.utils import BytesLike, fixed, to_hex, word
from delayproof.vdf.blob import VDFProof, decode_proof, encode_proof
from delayproof.vdf.wesolowski import (
    WesolowskiProof,
    WesolowskiVDF,
    check_modulus,
    hash_to_group,
)

default_logger = logging.getLogger(__name__)


def _check_path(path: Sequence[BytesLike]) -> Sequence[BytesLike]:
    if isinstance(path, (str, bytes, bytearray)):
        raise MalformedInput("path must be a sequence of addresses")
    return list(path)


def generate_seed(
    origin: BytesLike,
    path: Sequence[BytesLike],
    known_qty_in: Numberish,
    known_qty_out: Numberish,
) -> str:
    path = _check_path(path)
    size = Parameters.address_size
    return to_hex(
        Parameters.hash(
            fixed(origin, size)
            + word(len(path))
            + b"".join(fixed(p, size) for p in path)
            + word(known_qty_in)
            + word(known_qty_out)
        )
    )


def vdf_challenge(seed: BytesLike, block_hash: BytesLike) -> bytes:
    ws = Parameters.word_size
    return fixed(seed, ws) + fixed(block_hash, ws)


def generate_x(n: Numberish, seed: BytesLike, block_hash: BytesLike) -> int:
    return hash_to_group(vdf_challenge(seed, block_hash), check_modulus(n))


def check_blob_modulus(n: Numberish) -> int:
    # y and pi are stored as 32-byte words, so the group must fit in one
    n = check_modulus(n)
    if n.bit_length() > 8 * Parameters.word_size:
        raise MalformedInput(
            f"modulus wider than {Parameters.word_size} bytes cannot be encoded"
        )
    return n


def generate_vdf(
    *,
    n: Numberish,
    T: Numberish,
    origin: BytesLike,
    path: Sequence[BytesLike],
    known_qty_in: Numberish,
    known_qty_out: Numberish,
    block_hash: BytesLike,
    block_number: Numberish,
    on_progress: Optional[ProgressCallback] = None,
    progress_interval: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    logger = logger or default_logger
    n = check_blob_modulus(n)
    block_number = to_natural(block_number)
    if block_number.bit_length() > 8 * Parameters.word_size:
        raise MalformedInput("block number does not fit in 32 bytes")
    vdf = WesolowskiVDF(n, T, on_progress, progress_interval, logger)
    seed = generate_seed(origin, path, known_qty_in, known_qty_out)
    challenge = vdf_challenge(seed, block_hash)

    logger.info(
        "Generating VDF",
        extra={"seed": seed, "T": vdf.T, "block_number": block_number},
    )
    proof = vdf.eval_and_prove(challenge)
    logger.info("VDF generated", extra={"y": hex(proof.y)})
    return encode_proof(VDFProof(proof.pi, proof.y, block_number))


def is_valid_vdf(
    *,
    n: Numberish,
    T: Numberish,
    origin: BytesLike,
    path: Sequence[BytesLike],
    known_qty_in: Numberish,
    known_qty_out: Numberish,
    block_hash: BytesLike,
    proof: BytesLike,
    logger: Optional[logging.Logger] = None,
) -> bool:
    logger = logger or default_logger
    decoded = decode_proof(proof)
    vdf = WesolowskiVDF(check_modulus(n), T, logger=logger)
    seed = generate_seed(origin, path, known_qty_in, known_qty_out)
    challenge = vdf_challenge(seed, block_hash)
    x = hash_to_group(challenge, vdf.n)
    ok = vdf.verify(challenge, WesolowskiProof(x, decoded.y, decoded.pi))
    if not ok:
        logger.warning(
            "VDF proof rejected",
            extra={"seed": seed, "block_number": decoded.block_number},
        )
    return ok
