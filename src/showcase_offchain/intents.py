"""
Intents

The closed set of user operations the orchestration layer accepts. Each
variant is an immutable record of already validated primitive fields.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .assets import LABEL_NFT


class Contract(str, Enum):
    """Script families that can be locked to and unlocked from"""

    CHECK_DATUM = "check_datum"
    CHECK_REDEEMER = "check_redeemer"
    SC_WALLET = "sc_wallet"
    RECEIPTS = "receipts"
    ADMIN = "admin"


@dataclass(frozen=True)
class Transfer:
    to_address: str
    lovelace: int


@dataclass(frozen=True)
class Lock:
    """
    Lock lovelace at a contract.

    ``secret`` is required for CHECK_REDEEMER, ``beneficiary_address`` for ADMIN.
    """

    contract: Contract
    lovelace: int
    secret: Optional[str] = None
    beneficiary_address: Optional[str] = None


@dataclass(frozen=True)
class Unlock:
    """
    Collect from a contract. Unlocking RECEIPTS mints a receipt token.

    ``secret`` is required for CHECK_REDEEMER, ``sender_address`` for ADMIN.
    """

    contract: Contract
    secret: Optional[str] = None
    sender_address: Optional[str] = None


@dataclass(frozen=True)
class Mint:
    name: str
    image: str
    label: int = LABEL_NFT
    quantity: int = 1


@dataclass(frozen=True)
class Update:
    """``label`` defaults to the one used at mint; when given it must match it"""

    name: str
    image: str
    label: Optional[int] = None


@dataclass(frozen=True)
class Burn:
    label: Optional[int] = None


Intent = Union[Transfer, Lock, Unlock, Mint, Update, Burn]
