"""CLI entry point for working with signing and verification keys."""
from __future__ import annotations

import argparse
import logging
import sys

from sigkeys.core import base58
from sigkeys.core.errors import KeyConversionError
from sigkeys.core.keys import EncodedVerificationKey, SigningKey, build_full_verkey

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sigkeys", description="ed25519 key tool")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Create a signing key and print its verkey")
    gen.add_argument("--seed", default=None, help="32-byte seed (UTF-8 string)")
    gen.add_argument(
        "--reveal-secret", action="store_true", help="Also print the secret key"
    )

    expand = sub.add_parser("expand", help="Expand a short verkey")
    expand.add_argument("dest", help="Destination the short key belongs to")
    expand.add_argument("key", help="Short verkey (~...)")

    validate = sub.add_parser("validate", help="Check that a verkey is well formed")
    validate.add_argument("key", help="Verkey, optionally qualified with :algorithm")
    validate.add_argument("--dest", default=None, help="Destination for short verkeys")

    sign = sub.add_parser("sign", help="Sign a message with a seeded key")
    sign.add_argument("--seed", required=True, help="32-byte seed (UTF-8 string)")
    sign.add_argument("message", help="Message to sign (UTF-8 string)")

    verify = sub.add_parser("verify", help="Verify a base58 signature")
    verify.add_argument("key", help="Verkey, optionally qualified with :algorithm")
    verify.add_argument("message", help="Signed message (UTF-8 string)")
    verify.add_argument("signature", help="Base58 signature")

    return parser.parse_args(argv)


def load_signing_key(seed: str | None) -> SigningKey:
    """Derive a signing key from a seed string, or generate a random one."""
    if seed is None:
        return SigningKey.generate()
    return SigningKey.from_seed(seed.encode("utf-8"))


def cmd_generate(args: argparse.Namespace) -> int:
    with load_signing_key(args.seed) as signkey:
        with signkey.public_key() as verkey:
            print(f"Verkey: {verkey}")
        if args.reveal_secret:
            print(f"Secret key: {base58.encode(signkey.key)}")
    return 0


def cmd_expand(args: argparse.Namespace) -> int:
    with build_full_verkey(args.dest, args.key) as verkey:
        print(verkey)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    with EncodedVerificationKey.parse_qualified(args.key, args.dest) as verkey:
        verkey.validate()
    print("valid")
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    with load_signing_key(args.seed) as signkey:
        signature = signkey.sign(args.message.encode("utf-8"))
    print(base58.encode(signature))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    signature = base58.decode(args.signature)
    with EncodedVerificationKey.parse(args.key) as verkey:
        ok = verkey.verify_signature(args.message.encode("utf-8"), signature)
    print("valid" if ok else "invalid")
    return 0 if ok else 1


COMMANDS = {
    "generate": cmd_generate,
    "expand": cmd_expand,
    "validate": cmd_validate,
    "sign": cmd_sign,
    "verify": cmd_verify,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except KeyConversionError as err:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
