"""
Datum and Redeemer Encoding

Maps domain values to the Plutus data carried by outputs (datums) and script
executions (redeemers), and back. The supported shapes form a closed set:

- VOID: ``Constr 0 []``
- INT: bare integer
- BYTES: bare byte string (hash digests, key hashes, plaintext secrets)
- CIP68: ``Constr 0 [metadata, version, extra]``
- ACTION: ``Constr 0|1|2 []`` for Mint, Update, Burn
"""

import hashlib
from enum import Enum
from typing import Any, Dict, Union

import cbor2
import pycardano as pc
from pycardano.exception import DeserializeException
from pycardano.serialization import RawCBOR, default_encoder

from showcase_contracts.types import BurnAction, CIP68Datum, MintAction, UpdateAction

from .errors import EncodingMismatch, FieldTooLong


# CIP-68 metadata limits (asset names are capped at 32 bytes, 4 go to the label)
MAX_NAME_BYTES = 32 - 4
MAX_IMAGE_BYTES = 64
CIP68_VERSION = 1

# Constructor tags 121..127 encode Constr 0..6
_CONSTR_TAG_BASE = 121

ACTIONS = {MintAction.CONSTR_ID: MintAction, UpdateAction.CONSTR_ID: UpdateAction, BurnAction.CONSTR_ID: BurnAction}

Action = Union[MintAction, UpdateAction, BurnAction]


class Shape(str, Enum):
    """Datum/redeemer shapes understood by the encoder"""

    VOID = "void"
    INT = "int"
    BYTES = "bytes"
    CIP68 = "cip68"
    ACTION = "action"


def void() -> pc.Unit:
    return pc.Unit()


def encode(value: pc.Datum) -> bytes:
    """
    Encode a datum or redeemer value to CBOR

    Args:
        value: PlutusData instance, int or bytes

    Returns:
        CBOR bytes
    """
    if isinstance(value, bool):
        raise EncodingMismatch("Booleans are not Plutus data, use a constructor")
    if isinstance(value, pc.PlutusData):
        return value.to_cbor()
    if isinstance(value, (int, bytes, pc.IndefiniteList, list)):
        return cbor2.dumps(value, default=default_encoder)
    raise EncodingMismatch(f"Unsupported datum type: {type(value).__name__}")


def decode(cbor: bytes, shape: Shape) -> Any:
    """
    Decode CBOR against an expected shape

    Raises:
        EncodingMismatch: If the data does not have the requested shape
    """
    if shape == Shape.CIP68:
        try:
            return CIP68Datum.from_cbor(cbor)
        except (DeserializeException, AttributeError, TypeError, ValueError, KeyError) as e:
            raise EncodingMismatch(f"Not a CIP-68 datum: {e}") from e

    try:
        raw = cbor2.loads(cbor)
    except (cbor2.CBORDecodeError, ValueError) as e:
        raise EncodingMismatch(f"Invalid CBOR: {e}") from e

    if shape == Shape.INT:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
    elif shape == Shape.BYTES:
        if isinstance(raw, bytes):
            return raw
    elif shape == Shape.VOID:
        if _constr_index(raw) == 0 and not raw.value:
            return void()
    elif shape == Shape.ACTION:
        index = _constr_index(raw)
        if index in ACTIONS and not raw.value:
            return ACTIONS[index]()

    raise EncodingMismatch(f"Data {raw!r} does not match shape {shape.value}")


def _constr_index(raw: Any) -> int:
    if isinstance(raw, cbor2.CBORTag) and _CONSTR_TAG_BASE <= raw.tag < _CONSTR_TAG_BASE + 7:
        return raw.tag - _CONSTR_TAG_BASE
    return -1


def datum_cbor(datum: Any) -> bytes:
    """Normalise an inline datum as returned by a chain query to CBOR bytes"""
    if isinstance(datum, (pc.RawPlutusData, pc.PlutusData)):
        return datum.to_cbor()
    if isinstance(datum, RawCBOR):
        return datum.cbor
    return encode(datum)


def sha256_hex(secret: str) -> str:
    """Commitment for a plaintext secret, as stored by the check-redeemer lock"""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


################################################
# CIP-68
################################################


def validate_cip68_fields(name: str, image: str) -> None:
    """
    Enforce the metadata field limits before any other work

    Raises:
        FieldTooLong: If name exceeds 28 bytes or image exceeds 64 bytes
    """
    name_length = len(name.encode("utf-8"))
    if name_length > MAX_NAME_BYTES:
        raise FieldTooLong("Asset name", name_length, MAX_NAME_BYTES)

    image_length = len(image.encode("utf-8"))
    if image_length > MAX_IMAGE_BYTES:
        raise FieldTooLong("Asset image URL", image_length, MAX_IMAGE_BYTES)


def cip68_metadata(name: str, image: str) -> Dict[bytes, bytes]:
    return {b"name": name.encode("utf-8"), b"image": image.encode("utf-8")}


def cip68_datum(name: str, image: str) -> CIP68Datum:
    """Reference token datum, always version 1 with an empty extension list"""
    validate_cip68_fields(name, image)
    return CIP68Datum(metadata=cip68_metadata(name, image), version=CIP68_VERSION, extra=[])
