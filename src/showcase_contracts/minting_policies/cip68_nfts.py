#!opshin
from opshin.prelude import *
from showcase_contracts.util import *
from showcase_contracts.types import *


def validator(
    nonce: TxOutRef,
    redeemer: CIP68Action,
    context: ScriptContext,
) -> None:
    """
    One-shot CIP-68 policy for a reference/user token pair.

    Args:
        nonce: UTxO that must be consumed when minting, making the policy id unique
        redeemer: MintAction or BurnAction
        context: Script execution context
    """
    purpose = get_minting_purpose(context)
    our_minted = context.tx_info.mint.get(purpose.policy_id, {b"": 0})

    if isinstance(redeemer, MintAction):
        assert has_utxo(context, nonce), "UTxO not consumed"
        assert len(our_minted) == 2, "Must mint a reference and a user token"

    elif isinstance(redeemer, BurnAction):
        for token_name in our_minted.keys():
            assert our_minted[token_name] < 0, "Can only burn with BurnAction"

    else:
        assert False, "Invalid redeemer type"
