"""
UTxO selection and filtering

Predicates for picking script UTxOs by datum content, script reference or
asset unit. An empty selection is a normal result; callers decide whether
nothing found is fatal.
"""

from typing import Any, Callable, Iterable, List

import pycardano as pc

from .encoding import Shape, datum_cbor, decode
from .errors import EncodingMismatch
from .ledger import LedgerQuery, holds_unit


UtxoPredicate = Callable[[pc.UTxO], bool]


def select_at(ledger: LedgerQuery, address: pc.Address) -> List[pc.UTxO]:
    return ledger.utxos_at(address)


def select_by_unit(ledger: LedgerQuery, unit: str) -> pc.UTxO:
    return ledger.utxo_by_unit(unit)


def filter_utxos(utxos: Iterable[pc.UTxO], *predicates: UtxoPredicate) -> List[pc.UTxO]:
    """Keep the UTxOs matching every predicate, preserving order"""
    return [u for u in utxos if all(p(u) for p in predicates)]


def datum_equals(shape: Shape, expected: Any) -> UtxoPredicate:
    """
    Match UTxOs whose inline datum decodes to ``expected``

    UTxOs without a datum, or with a datum of another shape, do not match.
    """

    def predicate(utxo: pc.UTxO) -> bool:
        datum = utxo.output.datum
        if datum is None:
            return False
        try:
            return decode(datum_cbor(datum), shape) == expected
        except EncodingMismatch:
            return False

    return predicate


def without_script_ref() -> UtxoPredicate:
    """Exclude UTxOs carrying a reference script"""
    return lambda utxo: utxo.output.script is None


def holding_unit(unit: str) -> UtxoPredicate:
    return lambda utxo: holds_unit(utxo, unit)
