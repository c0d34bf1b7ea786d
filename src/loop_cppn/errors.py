"""Exceptions raised by the CPPN core.

Both are fatal: the core never recovers from them and never hands out a
partially rendered frame or animation.
"""


class CPPNError(Exception):
    """Base class for errors raised by `loop_cppn`."""
    pass


class DimensionMismatch(CPPNError, ValueError):
    """A signal fed to a layer or network has the wrong trailing size."""

    def __init__(self, expected: int, got: int, where: str = "network"):
        super().__init__(
            f"invalid number of inputs to {where}: expected {expected}, got {got}"
        )
        self.expected = expected
        self.got = got


class InvalidConfiguration(CPPNError, ValueError):
    """Configuration values that cannot produce a valid network or frame."""
    pass
