#!opshin
from opshin.prelude import *
from showcase_contracts.util import *


def validator(
    admin: PubKeyHash, beneficiary: PubKeyHash, redeemer: Anything, context: ScriptContext
) -> None:
    """
    Funds locked by an admin for a beneficiary.

    Args:
        admin: Key hash of the admin that locked the funds (script parameter)
        beneficiary: Key hash stored as the output datum
        redeemer: Unused
        context: Script execution context
    """
    assert is_signed_by(context, beneficiary) or is_signed_by(
        context, admin
    ), "Beneficiary or admin signature missing"
