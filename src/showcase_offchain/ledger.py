"""
Ledger Queries

Chain lookups the orchestration layer depends on: UTxOs at an address, the
UTxO holding an asset unit, and script bytes by hash.
"""

import logging
from typing import List, Optional, Union

import cbor2
import pycardano as pc
from blockfrost import ApiError, BlockFrostApi

from .chain_context import CardanoChainContext
from .errors import NotFound


logger = logging.getLogger(__name__)


def holds_unit(utxo: pc.UTxO, unit: str) -> bool:
    """Check whether a UTxO contains at least one token of a hex asset unit"""
    multi_asset = utxo.output.amount.multi_asset
    if not multi_asset:
        return False

    policy_hex, name_hex = unit[:56], unit[56:]
    for policy_id, assets in multi_asset.data.items():
        if policy_id.payload.hex() != policy_hex:
            continue
        for asset_name, quantity in assets.data.items():
            if asset_name.payload.hex() == name_hex and quantity > 0:
                return True
    return False


class LedgerQuery:
    """Chain lookups backed by the pycardano chain context and the BlockFrost API"""

    def __init__(self, chain_context: CardanoChainContext):
        self.chain_context = chain_context
        self.context = chain_context.get_context()
        self.api: BlockFrostApi = chain_context.get_api()

    def utxos_at(self, address: Union[pc.Address, str]) -> List[pc.UTxO]:
        """UTxOs locked at an address, empty when there are none"""
        return list(self.context.utxos(address))

    def utxo_by_unit(self, unit: str) -> pc.UTxO:
        """
        Find the UTxO currently holding an asset unit

        Args:
            unit: Hex policy id followed by hex asset name

        Returns:
            The UTxO holding the unit

        Raises:
            NotFound: If no address holds the unit
        """
        try:
            holders = self.api.asset_addresses(unit)
        except ApiError as e:
            if e.status_code == 404:
                raise NotFound(f"No UTxO holds asset {unit}") from e
            raise

        for holder in holders:
            for utxo in self.context.utxos(holder.address):
                if holds_unit(utxo, unit):
                    return utxo

        raise NotFound(f"No UTxO holds asset {unit}")

    def script_by_hash(self, script_hash: Union[pc.ScriptHash, str]) -> pc.PlutusV2Script:
        """
        Fetch a Plutus script's bytes by its hash

        Used to re-attach parameterized scripts whose parameters are no longer
        known (only the policy id or address was remembered).
        """
        if isinstance(script_hash, pc.ScriptHash):
            script_hash = script_hash.payload.hex()

        try:
            cbor_hex: Optional[str] = self.api.script_cbor(script_hash).cbor
        except ApiError as e:
            if e.status_code == 404:
                raise NotFound(f"Script {script_hash} not found") from e
            raise

        if not cbor_hex:
            raise NotFound(f"Script {script_hash} is not a Plutus script")

        script = pc.PlutusV2Script(bytes.fromhex(cbor_hex))
        if pc.plutus_script_hash(script).payload.hex() != script_hash:
            # Blockfrost may return the flat script wrapped in one more CBOR layer
            try:
                script = pc.PlutusV2Script(cbor2.loads(script))
            except (cbor2.CBORDecodeError, TypeError, ValueError) as e:
                raise NotFound(f"Script {script_hash} does not match its hash") from e
            if pc.plutus_script_hash(script).payload.hex() != script_hash:
                raise NotFound(f"Script {script_hash} does not match its hash")

        logger.debug(f"Fetched script {script_hash}")
        return script

    def last_block_slot(self) -> int:
        return self.context.last_block_slot
