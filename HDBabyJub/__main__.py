"""Derive Baby Jubjub keys from the command line

Examples:

    python -m HDBabyJub privkey "m/0'/1/2'" --mnemonic "abandon ... about"
    python -m HDBabyJub pubkey "m/0'" --seed 000102030405060708090a0b0c0d0e0f
    python -m HDBabyJub pubchild m/1/2 --public-key <64 hex digits> --chain-code <64 hex digits>

Every command prints one "name: hexvalue" line per field. K is printed in
packed form.
"""
import argparse
import binascii
import logging
import sys

from . import BIP32BabyJub, DerivationError, PublicNode, ser256
from .babyjub import pack_point, unpack_point


logger = logging.getLogger(__name__)


def logging_level(string):
    """Convert a string to a logging level"""
    if string.isnumeric():
        return int(string)
    level = getattr(logging, string.upper(), None)
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError("invalid log level {}".format(string))
    return level


def hex_bytes(string):
    try:
        return binascii.unhexlify(string)
    except (binascii.Error, ValueError):
        raise argparse.ArgumentTypeError("invalid hexadecimal value {!r}".format(string))


def add_seed_arguments(parser):
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('-m', '--mnemonic', type=str, help="BIP39 mnemonic phrase")
    source.add_argument('-s', '--seed', type=hex_bytes, help="seed, in hexadecimal")
    parser.add_argument('-p', '--passphrase', type=str, default="",
                        help="optional BIP39 passphrase (with --mnemonic)")


def seed_source(args):
    if args.mnemonic is not None:
        return args.mnemonic
    return args.seed


def print_node(fields):
    for name, value in fields:
        print("{}: {}".format(name, value.hex()))


def cmd_privkey(args):
    node = BIP32BabyJub.derive_private(seed_source(args), args.path, args.passphrase)
    print_node((
        ("k", ser256(node.k)),
        ("c", node.c),
        ("K", pack_point(BIP32BabyJub.point(node.k))),
    ))


def cmd_pubkey(args):
    node = BIP32BabyJub.derive_public(seed_source(args), args.path, args.passphrase)
    print_node((("K", pack_point(node.K)), ("c", node.c)))


def cmd_pubchild(args):
    if len(args.chain_code) != 32:
        raise DerivationError("Chain code must be 32 bytes, got {}".format(len(args.chain_code)))
    parent = PublicNode(unpack_point(args.public_key), args.chain_code)
    node = BIP32BabyJub.public_path_key(parent, args.path)
    print_node((("K", pack_point(node.K)), ("c", node.c)))


def main(argv=None):
    """Program entry point"""
    parser = argparse.ArgumentParser(description="Baby Jubjub hierarchical deterministic key derivation")
    parser.add_argument('-l', '--level', action='store',
                        type=logging_level, default=logging.WARNING,
                        help="set logging level")
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    privkey = subparsers.add_parser('privkey', help="derive an extended private key")
    privkey.add_argument('path', help="derivation path, eg m/0'/1/2'")
    add_seed_arguments(privkey)
    privkey.set_defaults(func=cmd_privkey)

    pubkey = subparsers.add_parser('pubkey', help="derive an extended public key")
    pubkey.add_argument('path', help="derivation path, eg m/0'/1/2'")
    add_seed_arguments(pubkey)
    pubkey.set_defaults(func=cmd_pubkey)

    pubchild = subparsers.add_parser('pubchild', help="derive a public child from a public key and chain code")
    pubchild.add_argument('path', help="non-hardened derivation path, eg m/1/2")
    pubchild.add_argument('-K', '--public-key', type=hex_bytes, required=True,
                          help="packed parent public key, in hexadecimal")
    pubchild.add_argument('-c', '--chain-code', type=hex_bytes, required=True,
                          help="parent chain code, in hexadecimal")
    pubchild.set_defaults(func=cmd_pubchild)

    args = parser.parse_args(argv)
    logging.basicConfig(format='[%(levelname)s] %(name)s: %(message)s', level=args.level)

    try:
        args.func(args)
    except DerivationError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
