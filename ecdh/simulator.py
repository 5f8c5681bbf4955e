"""ECDH demo: two simulated parties agree on a shared point. No transport."""

import argparse
import json
import random
import sys
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ecdh.common.config import CurveConfig, load_config
from ecdh.common.errors import ConfigurationError, SharedSecretMismatch
from ecdh.common.protocol import ExchangeReport, PartySummary, PublicKey
from ecdh.crypto.curve import Curve, Infinity
from ecdh.crypto.dh import Party, compute_session_key
from ecdh.crypto.scalar import ORDER_SEARCH_LIMIT, multiply, point_order


def send(obj) -> str:
    return json.dumps(obj)


def recv(line: str) -> dict:
    return json.loads(line)


def setup(config: CurveConfig):
    """Stage 1: build the curve, check G, and find its order when p is small enough."""
    curve = Curve(config)
    curve.validate(curve.G)

    order = None
    if config.p < ORDER_SEARCH_LIMIT:
        order = point_order(curve, curve.G)
        if not isinstance(multiply(curve, curve.G, order), Infinity):
            raise AssertionError(f"{order}*G is not the point at infinity")
    return curve, order


def simulate(config: CurveConfig, rng=None, alice_key: Optional[int] = None,
             bob_key: Optional[int] = None) -> ExchangeReport:
    """
    Run the three stages once: setup, key generation, exchange & derivation.
    Raises SharedSecretMismatch if the two sides disagree.
    """
    curve, order = setup(config)

    # -------------------- KEY GENERATION -------------------- #
    alice = Party("alice", curve, rng=rng, private_key=alice_key, order=order)
    bob = Party("bob", curve, rng=rng, private_key=bob_key, order=order)

    # -------------------- EXCHANGE -------------------- #
    wire_a = send(alice.public_message().model_dump())
    wire_b = send(bob.public_message().model_dump())
    bob.receive(PublicKey(**recv(wire_a)))
    alice.receive(PublicKey(**recv(wire_b)))

    # -------------------- DERIVATION -------------------- #
    secret_a = alice.shared_secret()
    secret_b = bob.shared_secret()
    if secret_a != secret_b:
        raise SharedSecretMismatch(f"alice derived {secret_a}, bob derived {secret_b}")

    session_key_hex = None
    if not isinstance(secret_a, Infinity):
        session_key_hex = compute_session_key(secret_a).hex()

    return ExchangeReport(
        p=config.p,
        a=config.a,
        b=config.b,
        generator=curve.G,
        order=order,
        alice=PartySummary(name=alice.name, private_key=alice.private_key,
                           public_point=alice.public_point, shared_secret=secret_a),
        bob=PartySummary(name=bob.name, private_key=bob.private_key,
                         public_point=bob.public_point, shared_secret=secret_b),
        match=True,
        session_key_hex=session_key_hex,
    )


def print_report(report: ExchangeReport):
    print("\nDemonstration of ECDH (Elliptic curve Diffie–Hellman key exchange).\n")
    print(f"We consider the elliptic curve\ny^2 = x^3 + {report.a}x + {report.b}\nover F_{report.p}.\n")
    print(f"We start up with the rational point G = {report.generator}.")
    if report.order is not None:
        print(f"The order of G is {report.order}.\n")
    else:
        print("The order of G was not computed (p is too large); keys are drawn below p.\n")

    print(f"1a. Alice chooses d_a = {report.alice.private_key} and computes Q_a = d_a G = {report.alice.public_point}.")
    print(f"1b. Bob chooses d_b = {report.bob.private_key} and computes Q_b = d_b G = {report.bob.public_point}.")
    print("2.  Alice sends Q_a to Bob while Bob sends Q_b to Alice.")
    print(f"3a. Alice computes d_a Q_b = {report.alice.shared_secret}.")
    print(f"3b. Bob computes d_b Q_a = {report.bob.shared_secret}.\n")

    print("✓ They coincide and can be used as a shared key.")
    if report.session_key_hex:
        print(f"✓ Session key K = Trunc16(SHA256(x)) = {report.session_key_hex}")
    else:
        print("⚠ Shared point is O; no session key derived")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulate an ECDH key exchange over F_p.")
    parser.add_argument("--seed", type=int, default=None, help="seed private-key sampling")
    parser.add_argument("--alice", type=int, default=None, help="Alice's private scalar")
    parser.add_argument("--bob", type=int, default=None, help="Bob's private scalar")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # Load environment variables from a .env file in the working directory, if present
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"❌ Invalid configuration: {e}")
        print("   Set ECDH_PRIME to a '3 mod 4'-type prime >= 7.")
        return 1

    rng = None
    if args.seed is not None:
        rng = random.Random(args.seed)

    try:
        report = simulate(config, rng=rng, alice_key=args.alice, bob_key=args.bob)
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    print_report(report)
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
