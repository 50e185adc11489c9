from opshin.prelude import *


def get_minting_purpose(context: ScriptContext) -> Minting:
    purpose = context.purpose
    assert isinstance(purpose, Minting)
    return purpose


def get_spending_purpose(context: ScriptContext) -> Spending:
    purpose = context.purpose
    assert isinstance(purpose, Spending)
    return purpose


def has_utxo(context: ScriptContext, oref: TxOutRef) -> bool:
    """Check if specified UTXO is consumed in transaction"""
    tx_info = context.tx_info
    for input_utxo in tx_info.inputs:
        if input_utxo.out_ref == oref:
            return True
    return False


def is_signed_by(context: ScriptContext, pkh: PubKeyHash) -> bool:
    return pkh in context.tx_info.signatories


def holds_policy_token(policy_id: PolicyId, output: TxOut) -> bool:
    """
    Returns whether the output contains any token of the given policy
    """
    default_tokens: Dict[bytes, int] = {b"": 0}
    policy_tokens = output.value.get(policy_id, default_tokens)

    for token_name in policy_tokens.keys():
        if policy_tokens[token_name] > 0:
            return True
    return False


def minted_amount(policy_id: PolicyId, context: ScriptContext) -> int:
    """Net amount minted under a policy (negative when burning)"""
    minted = context.tx_info.mint.get(policy_id, {b"": 0})
    return sum(minted.values())
