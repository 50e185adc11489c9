#!opshin
from opshin.prelude import *


def validator(datum: int, redeemer: Anything, context: ScriptContext) -> None:
    """
    Spendable by anyone, as long as the locked output carries the datum 42
    """
    assert datum == 42, "Datum must be 42"
