"""
Spend Showcase Off-chain Library

Transaction orchestration for the spend showcase: intents are turned into
script resolutions, UTxO selections and signed transactions, separated from
any user interface.
"""

from .actions import ShowcaseActions
from .chain_context import CardanoChainContext
from .config import Settings, configure_logging, get_settings
from .intents import Burn, Contract, Lock, Mint, Transfer, Unlock, Update
from .ledger import LedgerQuery
from .scripts import ScriptResolver, ScriptTemplate
from .session import SessionLink, SessionRegistry
from .transactions import TransactionAssembler
from .wallet import CardanoWallet


__all__ = [
    "ShowcaseActions",
    "CardanoChainContext",
    "CardanoWallet",
    "LedgerQuery",
    "ScriptResolver",
    "ScriptTemplate",
    "SessionLink",
    "SessionRegistry",
    "TransactionAssembler",
    "Settings",
    "configure_logging",
    "get_settings",
    "Contract",
    "Transfer",
    "Lock",
    "Unlock",
    "Mint",
    "Update",
    "Burn",
]
