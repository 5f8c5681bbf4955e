"""Pydantic models: ec_public (exchanged between parties) and the exchange report."""

from pydantic import BaseModel
from typing import Optional, Union

from ecdh.crypto.curve import Affine, Infinity


# -------------------- EXCHANGE -------------------- #

class PublicKey(BaseModel):
    type: str = "ec_public"
    party: str        # sender name
    x: int
    y: int


# -------------------- REPORT -------------------- #

class PartySummary(BaseModel):
    name: str
    private_key: int
    public_point: Affine
    shared_secret: Union[Affine, Infinity]


class ExchangeReport(BaseModel):
    type: str = "report"
    p: int
    a: int
    b: int
    generator: Affine
    order: Optional[int] = None       # None when the order search was skipped
    alice: PartySummary
    bob: PartySummary
    match: bool
    session_key_hex: Optional[str] = None   # None when the shared secret is Infinity
