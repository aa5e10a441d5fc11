class MalformedInput(ValueError):
    """An input could not be normalized before any computation started."""


class MalformedProof(MalformedInput):
    """A proof blob is not exactly 96 bytes of hex."""
