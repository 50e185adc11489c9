from opshin.prelude import *

################################################
# Constants
################################################
# CIP-67 asset name labels (label, crc-8 checksum, padding)
PREFIX_REFERENCE_TOKEN = b"\x00\x06\x43\xb0"  # 100
PREFIX_NFT = b"\x00\x0d\xe1\x40"  # 222
PREFIX_FT = b"\x00\x14\xdf\x10"  # 333
PREFIX_RFT = b"\x00\x1b\xc2\x80"  # 444

################################################
# CIP-68 Data Types
################################################
@dataclass()
class CIP68Datum(PlutusData):
    CONSTR_ID = 0
    metadata: Dict[bytes, bytes]  # name, image
    version: int  # Always 1
    extra: List[Anything]  # Unused extension slot


@dataclass()
class MintAction(PlutusData):
    CONSTR_ID = 0


@dataclass()
class UpdateAction(PlutusData):
    CONSTR_ID = 1


@dataclass()
class BurnAction(PlutusData):
    CONSTR_ID = 2


CIP68Action = Union[MintAction, UpdateAction, BurnAction]

################################################
# Receipt Data Types
################################################
@dataclass()
class OutputReference(PlutusData):
    """Flat output reference, hashed to derive receipt token names"""

    CONSTR_ID = 0
    transaction_id: bytes
    output_index: int
