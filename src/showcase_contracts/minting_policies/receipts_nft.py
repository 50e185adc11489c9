#!opshin
from opshin.prelude import *
from showcase_contracts.util import *


def validator(owner: PubKeyHash, redeemer: Anything, context: ScriptContext) -> None:
    """
    Receipt policy: the owner mints exactly one token per collection
    """
    purpose = get_minting_purpose(context)
    our_minted = context.tx_info.mint.get(purpose.policy_id, {b"": 0})

    assert is_signed_by(context, owner), "Owner signature missing"
    assert len(our_minted) == 1, "Must mint exactly 1 token name"
    assert sum(our_minted.values()) == 1, "Must mint exactly 1 receipt"
