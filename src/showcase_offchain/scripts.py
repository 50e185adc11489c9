"""
Script Address Resolution

Compiles OpShin script templates with their parameters and derives the
script address and policy id. Parameters are either a long-lived identity
(an operator key hash, giving a stable address) or a single-use seed (a
consumed output reference, giving a policy that can only ever mint once).
"""

import logging
import pathlib
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

import pycardano as pc
from opshin.builder import build

from .encoding import encode


logger = logging.getLogger(__name__)

CONTRACTS_DIR = pathlib.Path(__file__).parent.parent / "showcase_contracts"


class ScriptTemplate(str, Enum):
    """OpShin modules usable as script templates, relative to the contracts dir"""

    CHECK_DATUM = "validators/check_datum.py"
    CHECK_REDEEMER = "validators/check_redeemer.py"
    SC_WALLET = "validators/sc_wallet.py"
    ADMIN = "validators/admin.py"
    RECEIPTS = "validators/receipts.py"
    CIP68_STORE = "validators/cip68_store.py"
    RECEIPTS_NFT = "minting_policies/receipts_nft.py"
    CIP68_NFTS = "minting_policies/cip68_nfts.py"

    @property
    def path(self) -> pathlib.Path:
        return CONTRACTS_DIR / self.value


@dataclass(frozen=True)
class ResolvedScript:
    """A compiled, fully parameterized script with its derived identifiers"""

    script: pc.PlutusV2Script
    address: pc.Address
    policy_id: pc.ScriptHash

    @property
    def policy_id_hex(self) -> str:
        return self.policy_id.payload.hex()


def script_address(script: pc.PlutusV2Script, network: pc.Network) -> pc.Address:
    """Enterprise address of a script"""
    return pc.Address(payment_part=pc.plutus_script_hash(script), network=network)


def resolve_script(script: pc.PlutusV2Script, network: pc.Network) -> ResolvedScript:
    """Wrap already compiled script bytes, e.g. fetched back from the chain"""
    return ResolvedScript(
        script=script,
        address=script_address(script, network),
        policy_id=pc.plutus_script_hash(script),
    )


Compiler = Callable[..., pc.PlutusV2Script]


class ScriptResolver:
    """Resolves (template, parameters) to a script, address and policy id"""

    def __init__(self, network: pc.Network = pc.Network.TESTNET, compiler: Optional[Compiler] = None):
        """
        Initialize resolver

        Args:
            network: Network used for script addresses
            compiler: Callable ``(path, *params) -> PlutusV2Script``, defaults to opshin's build
        """
        self.network = network
        self.compiler = compiler or build
        self._compiled: Dict[Tuple[str, Tuple[bytes, ...]], pc.PlutusV2Script] = {}

    def resolve(self, template: ScriptTemplate, params: Sequence[pc.Datum] = ()) -> ResolvedScript:
        """
        Apply parameters to a template and derive its address and policy id

        Compilation results are memoised on the template and the CBOR of its
        parameters, so identical inputs always return the identical script.

        Args:
            template: Script template to compile
            params: Script parameters (key hashes as bytes, output references as PlutusData)

        Returns:
            ResolvedScript with script, address and policy id
        """
        key = (template.value, tuple(encode(p) for p in params))
        script = self._compiled.get(key)
        if script is None:
            logger.debug(f"Compiling {template.value} with {len(params)} parameter(s)")
            script = self.compiler(template.path, *params)
            self._compiled[key] = script

        return resolve_script(script, self.network)
