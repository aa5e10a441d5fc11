import gmpy2
from typing import Optional
from delayproof.progress import ProgressReporter


def square_chain(x: int, n: int, T: int, report: Optional[ProgressReporter] = None):
    # compute x^(2^T) mod n, one squaring at a time
    n = gmpy2.mpz(n)
    y = gmpy2.mpz(x) % n
    for i in range(T):
        y = y * y % n
        if report is not None:
            report(i)
    return int(y)


def compute_proof(
    g: int, l: int, n: int, T: int, report: Optional[ProgressReporter] = None
):
    # compute g^floor(2^T // l) mod n
    # https://eprint.iacr.org/2018/623.pdf section 4.1 algorithm 4
    n = gmpy2.mpz(n)
    g = gmpy2.mpz(g)
    x = gmpy2.mpz(1) % n
    r = 1
    for i in range(T):
        b = 2 * r // l
        r = 2 * r % l
        x = x * x * gmpy2.powmod(g, b, n) % n
        if report is not None:
            report(i)
    return int(x)


def wesolowski_check(g: int, y: int, pi: int, l: int, n: int, T: int) -> bool:
    # y == pi^l * g^(2^T mod l), 2^T is never materialized
    r = pow(2, T, l)
    lhs = gmpy2.powmod(pi, l, n) * gmpy2.powmod(g, r, n) % n
    return lhs == y
