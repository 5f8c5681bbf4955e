"""
Elliptic-curve DH helpers and key derivation:
Q = d*G, S = d*Q_peer, K = Trunc16(SHA256(big-endian(S.x)))
"""
import secrets
from hashlib import sha256
from typing import Optional

from ecdh.common.errors import InvalidPointError
from ecdh.common.protocol import PublicKey
from ecdh.common.utils import int_to_be
from ecdh.crypto.curve import Affine, Curve, Infinity, Point
from ecdh.crypto.scalar import multiply


def gen_private(rng, order: int) -> int:
    """Private scalar in [1, order-1]."""
    return rng.randint(1, order - 1)


def pub_from_priv(curve: Curve, priv: int) -> Point:
    return multiply(curve, curve.G, priv)


def compute_session_key(secret: Point) -> bytes:
    """Session key from the x coordinate of the shared point."""
    if isinstance(secret, Infinity):
        raise ValueError("shared secret is the point at infinity; no key can be derived")
    return sha256(int_to_be(secret.x)).digest()[:16]


def ecdh_generate(curve: Curve, rng=None, order: Optional[int] = None):
    """
    Generate a private/public key pair on the curve.
    Draws again when the public point comes out as Infinity, which can only
    happen while order is the p approximation instead of the true order of G.
    Returns: (priv, pub)
    """
    if rng is None:
        rng = secrets.SystemRandom()
    if order is None:
        order = curve.field.p
    while True:
        priv = gen_private(rng, order)
        pub = pub_from_priv(curve, priv)
        if not isinstance(pub, Infinity):
            return priv, pub


def ecdh_shared_secret(curve: Curve, my_priv: int, their_pub: Point) -> Point:
    return multiply(curve, their_pub, my_priv)


class Party:
    """One side of the exchange: owns a private scalar and its public point."""

    def __init__(self, name: str, curve: Curve, rng=None, private_key: Optional[int] = None,
                 order: Optional[int] = None):
        self.name = name
        self.curve = curve
        self.order = order if order is not None else curve.field.p

        if private_key is None:
            self.private_key, self.public_point = ecdh_generate(curve, rng, self.order)
        else:
            if not 1 <= private_key < self.order:
                raise ValueError(f"private key must be an integer in [1, {self.order - 1}]")
            self.private_key = private_key
            self.public_point = pub_from_priv(curve, private_key)

        self.peer_point: Optional[Affine] = None

    def __repr__(self):
        return f"Party({self.name!r}, public={self.public_point})"

    def public_message(self) -> PublicKey:
        if isinstance(self.public_point, Infinity):
            raise InvalidPointError(f"{self.name} has no finite public point to send")
        return PublicKey(party=self.name, x=self.public_point.x, y=self.public_point.y)

    def receive(self, msg: PublicKey) -> Affine:
        """Accept the peer's public point; it must lie on our curve."""
        point = Affine(x=msg.x, y=msg.y)
        self.curve.validate(point)
        self.peer_point = point
        return point

    def shared_secret(self, peer_point: Optional[Point] = None) -> Point:
        if peer_point is None:
            peer_point = self.peer_point
        if peer_point is None:
            raise ValueError(f"{self.name} has not received a public key yet")
        return ecdh_shared_secret(self.curve, self.private_key, peer_point)

    def derive_key(self, peer_point: Optional[Point] = None) -> bytes:
        return compute_session_key(self.shared_secret(peer_point))
