"""
Asset identifiers

Content-addressed asset names and CIP-67 labelled asset units.
"""

import hashlib
from typing import Iterable, List, Union

import cbor2
import pycardano as pc
from pycardano.serialization import default_encoder

from showcase_contracts.types import OutputReference


ASSET_NAME_LENGTH = 32

LABEL_REFERENCE = 100
LABEL_NFT = 222
LABEL_FT = 333
LABEL_RFT = 444


def output_references(utxos: Iterable[pc.UTxO]) -> List[OutputReference]:
    """Output references of UTxOs, in the order given"""
    return [
        OutputReference(transaction_id=u.input.transaction_id.payload, output_index=u.input.index)
        for u in utxos
    ]


def derive_asset_name(refs: List[OutputReference]) -> bytes:
    """
    Derive a receipt asset name from the output references it consumes

    The references are CBOR-encoded as a list of ``Constr 0 [tx_id, index]``
    and hashed with blake2b-256. Order is preserved, callers must pass the
    references in the order they were collected.

    Args:
        refs: Consumed output references

    Returns:
        32-byte asset name
    """
    preimage = cbor2.dumps(pc.IndefiniteList(list(refs)), default=default_encoder)
    return hashlib.blake2b(preimage, digest_size=ASSET_NAME_LENGTH).digest()


def _crc8(data: bytes) -> int:
    crc = 0
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = ((crc << 1) ^ 0x07) & 0xFF if crc & 0x80 else (crc << 1) & 0xFF
    return crc


def to_label(label: int) -> bytes:
    """
    CIP-67 asset name prefix for a label

    Four bytes: a zero nibble, the label as 16 bits, its crc-8 checksum and a
    closing zero nibble.
    """
    if not 0 <= label <= 0xFFFF:
        raise ValueError(f"Label out of range: {label}")
    label_hex = f"{label:04x}"
    checksum = _crc8(bytes.fromhex(label_hex))
    return bytes.fromhex(f"0{label_hex}{checksum:02x}0")


def from_text(text: str) -> bytes:
    return text.encode("utf-8")


def labelled_name(asset_name: bytes, label: int) -> pc.AssetName:
    return pc.AssetName(to_label(label) + asset_name)


def to_unit(policy_id: Union[pc.ScriptHash, str], asset_name: bytes, label: int) -> str:
    """Hex asset unit (policy id + labelled asset name), as used by chain queries"""
    if isinstance(policy_id, pc.ScriptHash):
        policy_id = policy_id.payload.hex()
    return policy_id + (to_label(label) + asset_name).hex()
