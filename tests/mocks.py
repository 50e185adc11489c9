"""
Mock Services for Off-chain Testing

Provides mock implementations of the chain, the ledger lookups and the
signer, so transactions can be assembled without a network.
"""

import hashlib
from typing import Dict, List, Optional, Union
from unittest.mock import MagicMock

import pycardano as pc
from blockfrost import ApiError

from showcase_offchain.encoding import encode
from showcase_offchain.errors import NotFound
from showcase_offchain.ledger import holds_unit


SAMPLE_TX_ID = "f" * 64


def api_error(status_code: int) -> ApiError:
    """Build a Blockfrost ApiError as raised for an HTTP error response"""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"status_code": status_code, "error": "Error", "message": "mock"}
    return ApiError(response)


def fake_compile(path, *params) -> pc.PlutusV2Script:
    """Stand-in for the OpShin compiler: script bytes depend on template and parameters only"""
    digest = hashlib.sha256(str(path).encode() + b"".join(encode(p) for p in params)).digest()
    return pc.PlutusV2Script(b"script" + digest)


def make_utxo(
    address: pc.Address,
    lovelace: int = 5_000_000,
    datum: Optional[pc.Datum] = None,
    multi_asset: Optional[pc.MultiAsset] = None,
    tx_id: str = "a" * 64,
    index: int = 0,
    script: Optional[pc.PlutusV2Script] = None,
) -> pc.UTxO:
    """Create a UTxO at an address"""
    value = pc.Value(lovelace, multi_asset) if multi_asset else pc.Value(lovelace)
    return pc.UTxO(
        pc.TransactionInput.from_primitive([tx_id, index]),
        pc.TransactionOutput(address, value, datum=datum, script=script),
    )


class MockWallet:
    """Mock signer with a freshly generated payment key"""

    def __init__(self, network: pc.Network = pc.Network.TESTNET):
        self.signing_key = pc.PaymentSigningKey.generate()
        self.payment_key_hash = self.signing_key.to_verification_key().hash()
        self.pkh = self.payment_key_hash.payload
        self.address = pc.Address(payment_part=self.payment_key_hash, network=network)


class MockBlockfrostAPI:
    """Mock Blockfrost API client for testing"""

    def __init__(self):
        self._holders: Dict[str, List[str]] = {}
        self._scripts: Dict[str, Optional[str]] = {}

    def asset_addresses(self, unit: str):
        """Mock asset holders query"""
        if unit not in self._holders:
            raise api_error(404)
        holders = []
        for address in self._holders[unit]:
            holder = MagicMock()
            holder.address = address
            holders.append(holder)
        return holders

    def script_cbor(self, script_hash: str):
        """Mock script CBOR query"""
        if script_hash not in self._scripts:
            raise api_error(404)
        mock = MagicMock()
        mock.cbor = self._scripts[script_hash]
        return mock

    def set_holder(self, unit: str, address: str):
        self._holders.setdefault(unit, []).append(address)

    def set_script(self, script_hash: str, cbor_hex: Optional[str]):
        self._scripts[script_hash] = cbor_hex


class MockPyCardanoContext:
    """Mock pycardano chain context holding UTxOs per address"""

    def __init__(self, last_block_slot: int = 1000):
        self.last_block_slot = last_block_slot
        self._utxos: Dict[str, List[pc.UTxO]] = {}
        self.submitted: List[pc.Transaction] = []

    def utxos(self, address: Union[pc.Address, str]) -> List[pc.UTxO]:
        return list(self._utxos.get(str(address), []))

    def submit_tx(self, tx):
        self.submitted.append(tx)

    def add_utxo(self, utxo: pc.UTxO):
        self._utxos.setdefault(str(utxo.output.address), []).append(utxo)


class MockChainContext:
    """Mock Cardano chain context for testing"""

    def __init__(self, network: str = "testnet"):
        self.network = network
        self.cardano_network = pc.Network.TESTNET
        self._api = MockBlockfrostAPI()
        self._context = MockPyCardanoContext()

    def get_context(self):
        """Get mock pycardano context"""
        return self._context

    def get_api(self):
        """Get mock Blockfrost API"""
        return self._api

    def get_explorer_url(self, tx_id: str) -> str:
        return f"https://preview.cardanoscan.io/transaction/{tx_id}"


class MockLedger:
    """In-memory ledger lookups recording every call"""

    def __init__(self):
        self._utxos: Dict[str, List[pc.UTxO]] = {}
        self._scripts: Dict[str, pc.PlutusV2Script] = {}
        self.calls: List[str] = []

    def add_utxo(self, utxo: pc.UTxO):
        self._utxos.setdefault(str(utxo.output.address), []).append(utxo)

    def add_script(self, script: pc.PlutusV2Script):
        self._scripts[pc.plutus_script_hash(script).payload.hex()] = script

    def utxos_at(self, address) -> List[pc.UTxO]:
        self.calls.append("utxos_at")
        return list(self._utxos.get(str(address), []))

    def utxo_by_unit(self, unit: str) -> pc.UTxO:
        self.calls.append("utxo_by_unit")
        for utxos in self._utxos.values():
            for utxo in utxos:
                if holds_unit(utxo, unit):
                    return utxo
        raise NotFound(f"No UTxO holds asset {unit}")

    def script_by_hash(self, script_hash) -> pc.PlutusV2Script:
        self.calls.append("script_by_hash")
        if isinstance(script_hash, pc.ScriptHash):
            script_hash = script_hash.payload.hex()
        if script_hash not in self._scripts:
            raise NotFound(f"Script {script_hash} not found")
        return self._scripts[script_hash]

    def last_block_slot(self) -> int:
        return 1000


class FakeSignedTx:
    """Signed transaction stand-in exposing only its id"""

    def __init__(self, tx_id: str):
        self.id = pc.TransactionId(bytes.fromhex(tx_id))
