class DerivationError(ValueError):
    """Base class of the errors raised while deriving keys"""


class PathFormatError(DerivationError):
    """The derivation path does not match m(/[0-9]+'?)*"""


class HardenedPublicDerivationError(DerivationError):
    """A hardened child was requested from a public key"""


class EncodingRangeError(DerivationError):
    """An integer does not fit in its fixed-width encoding"""


class PointDecodingError(DerivationError):
    """A packed buffer does not encode a point of the curve"""
