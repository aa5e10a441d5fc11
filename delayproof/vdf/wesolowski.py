from dataclasses import dataclass
from typing import Optional
import logging
from delayproof.abstract import AbstractVDF
from delayproof.errors import MalformedInput
from delayproof.math.rsa import compute_proof, square_chain, wesolowski_check
from delayproof.numberish import Numberish, to_natural, to_positive
from delayproof.params import Parameters
from delayproof.progress import ProgressCallback, ProgressReporter
from delayproof.utils import bytes2int, word


def check_modulus(n: Numberish) -> int:
    n = to_positive(n)
    if n < 2:
        raise MalformedInput("modulus must be greater than 1")
    return n


def hash_to_group(x: bytes, n: int) -> int:
    # hash `x` to an element of Z/nZ
    return bytes2int(Parameters.hash(x)) % n


def evaluate_vdf(
    x: Numberish,
    n: Numberish,
    T: Numberish,
    on_progress: Optional[ProgressCallback] = None,
    progress_interval: Optional[int] = None,
) -> int:
    n = check_modulus(n)
    T = to_positive(T)
    x = to_natural(x)
    report = ProgressReporter(on_progress, T, progress_interval)
    return square_chain(x, n, T, report)


def generate_challenge(x: Numberish, y: Numberish, n: Numberish, T: Numberish) -> int:
    # Fiat-Shamir: the challenge is a hash of the whole statement, forced odd
    ws = Parameters.word_size
    h = Parameters.hash(word(x, ws) + word(y, ws) + word(n, ws) + word(T, ws))
    c = bytes2int(h)
    if c % 2 == 0:
        c += 1
    return c


def generate_proof(
    x: Numberish,
    c: Numberish,
    n: Numberish,
    T: Numberish,
    on_progress: Optional[ProgressCallback] = None,
    progress_interval: Optional[int] = None,
) -> int:
    n = check_modulus(n)
    T = to_positive(T)
    c = to_positive(c)
    x = to_natural(x)
    report = ProgressReporter(on_progress, T, progress_interval)
    return compute_proof(x, c, n, T, report)


def verify_proof(x: int, y: int, pi: int, n: int, T: int) -> bool:
    n = check_modulus(n)
    T = to_positive(T)
    if not (0 <= y < n and 0 <= pi < n):
        return False
    c = generate_challenge(x, y, n, T)
    return wesolowski_check(x, y, pi, c, n, T)


@dataclass
class WesolowskiProof:
    x: int
    y: int
    pi: int


class WesolowskiVDF(AbstractVDF[bytes, WesolowskiProof]):
    def __init__(
        self,
        n: Numberish,
        T: Numberish,
        on_progress: Optional[ProgressCallback] = None,
        progress_interval: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.n = check_modulus(n)
        self.T = to_positive(T)
        self.on_progress = on_progress
        self.progress_interval = progress_interval
        self.logger = logger or logging.getLogger(__name__)

    def eval(self, challenge: bytes) -> tuple[int, int]:
        x = hash_to_group(challenge, self.n)
        self.logger.debug("Evaluating VDF", extra={"x": hex(x), "T": self.T})
        y = evaluate_vdf(x, self.n, self.T, self.on_progress, self.progress_interval)
        return x, y

    def prove(self, x: int, y: int) -> int:
        c = generate_challenge(x, y, self.n, self.T)
        self.logger.debug("Computing proof", extra={"c": hex(c)})
        return generate_proof(
            x, c, self.n, self.T, self.on_progress, self.progress_interval
        )

    def eval_and_prove(self, challenge: bytes) -> WesolowskiProof:
        x, y = self.eval(challenge)
        pi = self.prove(x, y)
        return WesolowskiProof(x, y, pi)

    def verify(self, challenge: bytes, proof: WesolowskiProof) -> bool:
        x = hash_to_group(challenge, self.n)
        if x != proof.x:
            return False
        return verify_proof(x, proof.y, proof.pi, self.n, self.T)

    def extract_y(self, proof: WesolowskiProof) -> bytes:
        return word(proof.y, Parameters.word_size)
