from dataclasses import dataclass
from typing import Union
from delayproof.errors import MalformedProof
from delayproof.params import Parameters
from delayproof.utils import bytes2int, to_hex

# pi || y || blockNumber, one 32-byte word each; blockNumber is not verified
PROOF_FIELDS = 3
PROOF_SIZE = PROOF_FIELDS * Parameters.word_size


@dataclass(frozen=True)
class VDFProof:
    pi: int
    y: int
    block_number: int


def _field(v: int, name: str) -> bytes:
    try:
        return int(v).to_bytes(Parameters.word_size, "big")
    except OverflowError:
        raise MalformedProof(
            f"{name} does not fit in {Parameters.word_size} bytes"
        ) from None


def encode_proof(proof: VDFProof) -> str:
    return to_hex(
        _field(proof.pi, "pi")
        + _field(proof.y, "y")
        + _field(proof.block_number, "block number")
    )


def proof_bytes(blob: Union[str, bytes]) -> bytes:
    if isinstance(blob, (bytes, bytearray)):
        raw = bytes(blob)
    elif isinstance(blob, str):
        s = blob[2:] if blob[:2] in ("0x", "0X") else blob
        try:
            raw = bytes.fromhex(s)
        except ValueError:
            raise MalformedProof("proof is not a hex string") from None
    else:
        raise MalformedProof(f"cannot decode a proof from {type(blob).__name__}")
    if len(raw) != PROOF_SIZE:
        raise MalformedProof(f"proof must be {PROOF_SIZE} bytes, got {len(raw)}")
    return raw


def decode_proof(blob: Union[str, bytes]) -> VDFProof:
    raw = proof_bytes(blob)
    ws = Parameters.word_size
    pi, y, block_number = (
        bytes2int(raw[i * ws : (i + 1) * ws]) for i in range(PROOF_FIELDS)
    )
    return VDFProof(pi, y, block_number)
