from delayproof.utils import keccak256


class Parameters:
    # reference modulus; its factorization must stay unknown to every party
    n = 44771746775035800231893057667067514385523709770528832291415080542575843241867
    T = 1000
    # report progress at most once per this many squarings
    progress_interval = 100
    address_size = 20
    word_size = 32

    @staticmethod
    def hash(x: bytes) -> bytes:
        return keccak256(x)
