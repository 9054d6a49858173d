"""
Exceptions raised by the growth engine and its geometry kernel.
"""


class InvalidEnvelopeError(ValueError):
    """The bounding planes cannot enclose a volume to sample from."""


class DegenerateVectorError(ValueError):
    """A zero-length vector was used where a direction is required."""
