#!opshin
from opshin.prelude import *
from showcase_contracts.util import *


def validator(
    owner: PubKeyHash, datum: Anything, redeemer: Anything, context: ScriptContext
) -> None:
    """
    Script-controlled wallet, only the owner the script was built for can spend
    """
    assert is_signed_by(context, owner), "Owner signature missing"
