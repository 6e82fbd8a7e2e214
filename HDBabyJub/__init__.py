"""Hierarchical Deterministic (HD) derivation of Baby Jubjub keys

BIP32-style derivation where private keys are scalars modulo the order of the
Baby Jubjub prime subgroup and public keys are multiples of its Base8 generator.

Usage:

    from HDBabyJub import BIP32BabyJub

    mnemonic = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"
    k, c = BIP32BabyJub.derive_mnemonic("m/0'/1/2'", mnemonic)
    K, c = BIP32BabyJub.public_key(BIP32BabyJub.derive_mnemonic("m/0'/1/2'", mnemonic))
    # k is a private scalar, K the matching curve point, c the chaincode

This file is formatted using "black --line-length=120"
"""
import hashlib
import hmac
import logging
import re
from typing import List, NamedTuple, Union

from mnemonic import Mnemonic

from .babyjub import BabyJubCurve, Point
from .errors import (
    DerivationError,
    EncodingRangeError,
    HardenedPublicDerivationError,
    PathFormatError,
    PointDecodingError,
)

logger = logging.getLogger(__name__)

MASTER_KEY_DOMAIN = b"BabyJub seed"

HARDENED_OFFSET = 0x80000000

UINT32_MAX = 0xFFFFFFFF

UINT256_LIMIT = 1 << 256

_PATH_SEGMENT_RE = re.compile(r"^([0-9]+)(')?$")


class PrivateNode(NamedTuple):
    k: int
    c: bytes


class PublicNode(NamedTuple):
    K: Point
    c: bytes


SeedSource = Union[bytes, str]


def _hmac_sha512(secret: bytes, message: bytes) -> bytes:
    return hmac.new(secret, message, hashlib.sha512).digest()


def ser32(i: int) -> bytes:
    """Serialize a 32-bit unsigned integer as 4 bytes big endian"""
    if not 0 <= i <= UINT32_MAX:
        raise EncodingRangeError("Index out of the 32-bit range: {}".format(i))
    return i.to_bytes(4, "big")


def ser256(x: int) -> bytes:
    """Serialize a 256-bit unsigned integer as 32 bytes big endian"""
    if not 0 <= x < UINT256_LIMIT:
        raise EncodingRangeError("Scalar out of the 256-bit range")
    return x.to_bytes(32, "big")


def parse256(data: bytes) -> int:
    # Not reduced: the callers reduce modulo the subgroup order when needed
    return int.from_bytes(data, "big")


def is_hardened(i: int) -> bool:
    return i >= HARDENED_OFFSET


def parse_path(path: str) -> List[int]:
    """
    INPUT:
      path: text representation of a derivation path, eg m/44'/0/1

    OUTPUT:
      list of indexes, HARDENED_OFFSET is added to the indexes marked with '

    PROCESS:
      1. split the path on /, the first part must be m
      2. every other part is a decimal index, optionally followed by '
      3. each part gets its own hardened offset
    """
    steps = path.split("/")
    if steps[0] != "m":
        raise PathFormatError("Wrong path: path must begin with 'm': {!r}".format(path))

    indexes = []
    for step in steps[1:]:
        match = _PATH_SEGMENT_RE.match(step)
        if match is None:
            raise PathFormatError("Wrong path: not a number inside the path: {!r}".format(step))
        i = int(match.group(1))
        if i >= HARDENED_OFFSET:
            raise PathFormatError("Wrong path: index too large: {}".format(i))
        if match.group(2):
            i += HARDENED_OFFSET
        indexes.append(i)
    return indexes


class BIP32BabyJub:
    """Hierarchical Deterministic (HD) Baby Jubjub derivation"""

    curve = BabyJubCurve()

    @classmethod
    def serp(cls, point: Point) -> bytes:
        return cls.curve.compress_point(point)

    @classmethod
    def point(cls, k: int) -> Point:
        """Transform a scalar (private key) into a public point"""
        return cls.curve.scalar_multiply(k, cls.curve.base_point)

    @classmethod
    def root_key(cls, seed: bytes) -> PrivateNode:
        """
        INPUT:
          S: seed bytes, usually 512 bits from BIP39
          seedkey: "BabyJub seed"

        OUTPUT:
          k, c

        PROCESS:
          1. compute I = HMAC-SHA512(key=seedkey, Data=S)
          2. k = BEBytes_to_int(I[0:32]) mod N
          3. c = I[32:64]
          4. return k, c
        """
        i = _hmac_sha512(MASTER_KEY_DOMAIN, seed)
        k = parse256(i[:32]) % cls.curve.subgroup_order
        return PrivateNode(k, i[32:])

    @classmethod
    def private_child_key(cls, node: PrivateNode, i: int) -> PrivateNode:
        """
        INPUT:
          k: private scalar
          c: 32 bytes chain code
          i: child index to compute (hardened if >= 0x80000000)

        OUTPUT:
          k_i: ith-child private scalar
          c_i: ith-child chain code

        PROCESS:
          1. encode i 4-bytes big endian, ib = ser32(i)
          2. if i is less than 2^31
               - compute I = HMAC-SHA512(key=c, Data=serp(k.G) | ib)
             else
               - compute I = HMAC-SHA512(key=c, Data=ser256(k) | ib)
          3. k_i = (k + BEBytes_to_int(I[0:32])) mod N
          4. c_i = I[32:64]
          5. return k_i, c_i
        """
        k, c = node
        i_bytes = ser32(i)

        if is_hardened(i):
            data = ser256(k)
        else:
            data = cls.serp(cls.point(k))
        i_hmac = _hmac_sha512(c, data + i_bytes)

        ki = (k + parse256(i_hmac[:32])) % cls.curve.subgroup_order
        return PrivateNode(ki, i_hmac[32:])

    @classmethod
    def public_child_key(cls, node: PublicNode, i: int) -> PublicNode:
        """
        INPUT:
          K: public point
          c: 32 bytes chain code
          i: child index to compute, must not be hardened

        OUTPUT:
          K_i: ith-child public point
          c_i: ith-child chain code

        PROCESS:
          1. reject hardened indexes, they need the parent private key
          2. compute I = HMAC-SHA512(key=c, Data=serp(K) | ser32(i))
          3. K_i = K + BEBytes_to_int(I[0:32]).G
          4. c_i = I[32:64]
          5. return K_i, c_i
        """
        if is_hardened(i):
            raise HardenedPublicDerivationError("Cannot derive hardened child from public key")
        K, c = node
        i_hmac = _hmac_sha512(c, cls.serp(K) + ser32(i))

        Ki = cls.curve.point_add(K, cls.point(parse256(i_hmac[:32])))
        return PublicNode(Ki, i_hmac[32:])

    @classmethod
    def public_key(cls, node: PrivateNode) -> PublicNode:
        return PublicNode(cls.point(node.k), node.c)

    @classmethod
    def private_path_key(cls, node: PrivateNode, path: str) -> PrivateNode:
        for i in parse_path(path):
            logger.debug("Deriving private child %d (hardened=%s)", i & ~HARDENED_OFFSET, is_hardened(i))
            node = cls.private_child_key(node, i)
        return node

    @classmethod
    def public_path_key(cls, node: PublicNode, path: str) -> PublicNode:
        """Derive along a path from a public node, every step must be non-hardened"""
        indexes = parse_path(path)
        if any(is_hardened(i) for i in indexes):
            raise HardenedPublicDerivationError("Cannot derive hardened child from public key: {}".format(path))
        for i in indexes:
            logger.debug("Deriving public child %d", i)
            node = cls.public_child_key(node, i)
        return node

    @staticmethod
    def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
        """
        INPUT:
           mnemonic: BIP39 words
           passphrase: optional passphrase

        OUTPUT:
           512bits seed
        """
        return Mnemonic.to_seed(mnemonic, passphrase)

    @classmethod
    def seed_from_source(cls, source: SeedSource, passphrase: str = "") -> bytes:
        if isinstance(source, (bytes, bytearray)):
            return bytes(source)
        if isinstance(source, str):
            return cls.mnemonic_to_seed(source, passphrase)
        raise TypeError("Seed source must be bytes or a mnemonic string, not {}".format(type(source).__name__))

    @classmethod
    def derive_seed(cls, path: str, seed: bytes) -> PrivateNode:
        """
        INPUT:
           path: string path to derive (eg m/0'/1/2')
           seed: seed bytes (eg: 512bits from BIP39 words)

        OUTPUT
           k : private scalar
           c : 32 bytes chain code
        """
        node = cls.root_key(seed)
        return cls.private_path_key(node, path)

    @classmethod
    def derive_mnemonic(cls, path: str, mnemonic: str, passphrase: str = "") -> PrivateNode:
        seed = cls.mnemonic_to_seed(mnemonic, passphrase)
        return cls.derive_seed(path, seed)

    @classmethod
    def derive_private(cls, source: SeedSource, path: str, passphrase: str = "") -> PrivateNode:
        return cls.derive_seed(path, cls.seed_from_source(source, passphrase))

    @classmethod
    def derive_public(cls, source: SeedSource, path: str, passphrase: str = "") -> PublicNode:
        # Full private derivation, then k.G: hardened steps are allowed here
        return cls.public_key(cls.derive_private(source, path, passphrase))


master_key = BIP32BabyJub.root_key
derive_child_private = BIP32BabyJub.private_child_key
derive_child_public = BIP32BabyJub.public_child_key
derive_private_key_from_path = BIP32BabyJub.derive_private
derive_public_key_from_path = BIP32BabyJub.derive_public

__all__ = [
    "BIP32BabyJub",
    "DerivationError",
    "EncodingRangeError",
    "HARDENED_OFFSET",
    "HardenedPublicDerivationError",
    "MASTER_KEY_DOMAIN",
    "PathFormatError",
    "Point",
    "PointDecodingError",
    "PrivateNode",
    "PublicNode",
    "derive_child_private",
    "derive_child_public",
    "derive_private_key_from_path",
    "derive_public_key_from_path",
    "master_key",
    "parse256",
    "parse_path",
    "ser256",
    "ser32",
]
