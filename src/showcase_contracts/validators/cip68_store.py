#!opshin
from opshin.prelude import *
from showcase_contracts.util import *
from showcase_contracts.types import *


def validator(
    policy_id: PolicyId,
    datum: CIP68Datum,
    redeemer: CIP68Action,
    context: ScriptContext,
) -> None:
    """
    Holds CIP-68 reference tokens and their metadata datum.

    Args:
        policy_id: Minting policy of the token pairs kept here
        datum: Current metadata of the reference token
        redeemer: UpdateAction or BurnAction
        context: Script execution context
    """
    tx_info = context.tx_info
    purpose = get_spending_purpose(context)

    if isinstance(redeemer, UpdateAction):
        # The user token must be presented next to the reference token
        holders = [i for i in tx_info.inputs if holds_policy_token(policy_id, i.resolved)]
        assert len(holders) >= 2, "User token must be spent alongside the reference token"

        own_address = b""
        for txin in tx_info.inputs:
            if txin.out_ref == purpose.tx_out_ref:
                own_address = txin.resolved.address.payment_credential.credential_hash
        continued = [
            o
            for o in tx_info.outputs
            if o.address.payment_credential.credential_hash == own_address
            and holds_policy_token(policy_id, o)
        ]
        assert len(continued) == 1, "Reference token must stay at the script address"

    elif isinstance(redeemer, BurnAction):
        assert minted_amount(policy_id, context) < 0, "Reference token must be burned"

    else:
        assert False, "Invalid redeemer type"
