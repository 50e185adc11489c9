#!opshin
from opshin.prelude import *
from showcase_contracts.util import *


def validator(
    receipt_policy_id: PolicyId, datum: Anything, redeemer: Anything, context: ScriptContext
) -> None:
    """
    Locked funds may only be collected together with minting one receipt
    """
    assert minted_amount(receipt_policy_id, context) == 1, "Must mint exactly 1 receipt"
