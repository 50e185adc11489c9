#!opshin
from opshin.prelude import *
from opshin.std.builtins import *


def validator(datum: bytes, redeemer: bytes, context: ScriptContext) -> None:
    """
    Hash-lock: the datum is the sha2-256 digest of a secret and the redeemer
    must reveal that secret
    """
    assert sha2_256(redeemer) == datum, "Redeemer does not match the committed hash"
