"""
Cardano Transaction Assembly

Builds the draft transaction for every intent recipe, then finalizes
(balance, fee, collateral, signatures) and submits it. Every draft carries the
same validity window: no lower bound, upper bound a fixed number of slots
after the current tip.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pycardano as pc
from blockfrost import ApiError
from pycardano.exception import TransactionFailedException
from requests import RequestException

from .assets import LABEL_REFERENCE, labelled_name
from .config import Settings, get_settings
from .errors import AssemblyFailed, SubmissionFailed
from .scripts import ResolvedScript


logger = logging.getLogger(__name__)


@dataclass
class DraftTransaction:
    """A configured transaction builder waiting to be balanced and signed"""

    builder: pc.TransactionBuilder
    change_address: pc.Address
    description: str
    minted: List[pc.AssetName] = field(default_factory=list)


class TransactionAssembler:
    """Turns resolved scripts, datums, redeemers and UTxOs into transactions"""

    def __init__(self, context: pc.ChainContext, settings: Optional[Settings] = None):
        """
        Initialize assembler

        Args:
            context: PyCardano chain context used for balancing and submission
            settings: Settings providing the validity window
        """
        self.context = context
        self.settings = settings or get_settings()

    def _new_builder(self, funding_address: pc.Address) -> pc.TransactionBuilder:
        builder = pc.TransactionBuilder(self.context)
        builder.add_input_address(funding_address)
        builder.ttl = self.context.last_block_slot + self.settings.validity_seconds
        return builder

    def _output_with_min_lovelace(
        self, address: pc.Address, multi_asset: pc.MultiAsset, datum: Optional[pc.Datum] = None
    ) -> pc.TransactionOutput:
        min_val = pc.min_lovelace(
            self.context,
            output=pc.TransactionOutput(address, pc.Value(0, multi_asset), datum=datum),
        )
        return pc.TransactionOutput(address, pc.Value(min_val, multi_asset), datum=datum)

    @staticmethod
    def _multi_asset(policy_id: pc.ScriptHash, amounts: dict) -> pc.MultiAsset:
        return pc.MultiAsset({policy_id: pc.Asset(amounts)})

    ################################################
    # Recipes
    ################################################

    def assemble_transfer(
        self, funding_address: pc.Address, to_address: pc.Address, lovelace: int
    ) -> DraftTransaction:
        """Single payment output, no script involvement"""
        builder = self._new_builder(funding_address)
        builder.add_output(pc.TransactionOutput(to_address, pc.Value(lovelace)))
        return DraftTransaction(builder, funding_address, "transfer")

    def assemble_lock(
        self,
        funding_address: pc.Address,
        script: ResolvedScript,
        datum: pc.Datum,
        chunks: Sequence[int],
    ) -> DraftTransaction:
        """
        Pay one output per chunk to a script address, each with the same inline datum

        Args:
            funding_address: Wallet address funding the lock and receiving change
            script: Resolved spending validator
            datum: Inline datum attached to every output
            chunks: Lovelace per output, from the partitioner
        """
        builder = self._new_builder(funding_address)
        for lovelace in chunks:
            builder.add_output(pc.TransactionOutput(script.address, pc.Value(lovelace), datum=datum))
        return DraftTransaction(builder, funding_address, f"lock {len(chunks)} output(s)")

    def assemble_unlock(
        self,
        funding_address: pc.Address,
        script: ResolvedScript,
        utxos: Sequence[pc.UTxO],
        redeemer: pc.Datum,
        signers: Sequence[pc.VerificationKeyHash] = (),
    ) -> DraftTransaction:
        """
        Collect script UTxOs with a redeemer, attaching the spending validator

        Args:
            funding_address: Wallet address paying fees and receiving the funds
            script: Resolved spending validator of the UTxOs
            utxos: Script UTxOs to collect
            redeemer: Redeemer data passed for every input
            signers: Key hashes the script requires as signatories
        """
        if not utxos:
            raise AssemblyFailed(f"No UTxOs to collect at {script.address}")

        builder = self._new_builder(funding_address)
        for utxo in utxos:
            builder.add_script_input(utxo, script=script.script, redeemer=pc.Redeemer(redeemer))
        if signers:
            builder.required_signers = list(signers)
        return DraftTransaction(builder, funding_address, f"unlock {len(utxos)} UTxO(s)")

    def assemble_receipt_mint(
        self,
        funding_address: pc.Address,
        validator: ResolvedScript,
        policy: ResolvedScript,
        utxos: Sequence[pc.UTxO],
        redeemer: pc.Datum,
        asset_name: bytes,
        signer: pc.VerificationKeyHash,
    ) -> DraftTransaction:
        """
        Collect locked UTxOs and mint exactly one receipt named after them
        """
        draft = self.assemble_unlock(funding_address, validator, utxos, redeemer, [signer])
        builder = draft.builder

        receipt = pc.AssetName(asset_name)
        builder.mint = self._multi_asset(policy.policy_id, {receipt: 1})
        builder.add_minting_script(script=policy.script, redeemer=pc.Redeemer(redeemer))

        draft.description = f"receipt mint from {len(utxos)} UTxO(s)"
        draft.minted = [receipt]
        return draft

    def assemble_cip68_mint(
        self,
        funding_address: pc.Address,
        nonce: pc.UTxO,
        policy: ResolvedScript,
        store: ResolvedScript,
        asset_name: bytes,
        label: int,
        quantity: int,
        datum: pc.Datum,
        redeemer: pc.Datum,
    ) -> DraftTransaction:
        """
        Mint a reference token and user tokens, locking the reference token with its metadata

        Args:
            funding_address: Wallet address, receives the user tokens as change
            nonce: Wallet UTxO the policy was parameterized with, consumed here
            policy: One-shot minting policy
            store: Validator holding reference tokens
            asset_name: Unlabelled asset name
            label: CIP-67 label of the user token
            quantity: Number of user tokens
            datum: CIP-68 metadata datum
            redeemer: Mint action
        """
        builder = self._new_builder(funding_address)
        builder.add_input(nonce)

        ref_name = labelled_name(asset_name, LABEL_REFERENCE)
        user_name = labelled_name(asset_name, label)

        builder.mint = self._multi_asset(policy.policy_id, {ref_name: 1, user_name: quantity})
        builder.add_minting_script(script=policy.script, redeemer=pc.Redeemer(redeemer))

        ref_asset = self._multi_asset(policy.policy_id, {ref_name: 1})
        builder.add_output(self._output_with_min_lovelace(store.address, ref_asset, datum))

        return DraftTransaction(builder, funding_address, "cip68 mint", minted=[ref_name, user_name])

    def assemble_cip68_update(
        self,
        funding_address: pc.Address,
        ref_utxo: pc.UTxO,
        user_utxo: pc.UTxO,
        validator: pc.PlutusV2Script,
        datum: pc.Datum,
        redeemer: pc.Datum,
    ) -> DraftTransaction:
        """
        Rewrite the reference token datum

        The user token is spent without being burned and returns to the wallet
        as change; its presence proves the caller holds it.
        """
        builder = self._new_builder(funding_address)
        builder.add_script_input(ref_utxo, script=validator, redeemer=pc.Redeemer(redeemer))
        builder.add_input(user_utxo)
        builder.add_output(pc.TransactionOutput(ref_utxo.output.address, ref_utxo.output.amount, datum=datum))
        return DraftTransaction(builder, funding_address, "cip68 update")

    def assemble_cip68_burn(
        self,
        funding_address: pc.Address,
        ref_utxo: pc.UTxO,
        user_utxo: pc.UTxO,
        validator: pc.PlutusV2Script,
        policy: pc.PlutusV2Script,
        asset_name: bytes,
        label: int,
        redeemer: pc.Datum,
    ) -> DraftTransaction:
        """Destroy the reference token and one user token together"""
        builder = self._new_builder(funding_address)
        builder.add_script_input(ref_utxo, script=validator, redeemer=pc.Redeemer(redeemer))
        builder.add_input(user_utxo)

        ref_name = labelled_name(asset_name, LABEL_REFERENCE)
        user_name = labelled_name(asset_name, label)
        builder.mint = self._multi_asset(pc.plutus_script_hash(policy), {ref_name: -1, user_name: -1})
        builder.add_minting_script(script=policy, redeemer=pc.Redeemer(redeemer))

        return DraftTransaction(builder, funding_address, "cip68 burn")

    ################################################
    # Finalization
    ################################################

    def finalize(self, draft: DraftTransaction, signing_keys: Sequence[pc.SigningKey]) -> pc.Transaction:
        """
        Balance, compute fees and sign a draft

        Raises:
            AssemblyFailed: If the builder cannot balance, evaluate or sign
        """
        try:
            return draft.builder.build_and_sign(list(signing_keys), change_address=draft.change_address)
        except Exception as e:
            raise AssemblyFailed(f"Error building {draft.description} transaction: {e}") from e

    def submit(self, signed_tx: pc.Transaction) -> str:
        """
        Submit a signed transaction

        Returns:
            Transaction ID as hex

        Raises:
            SubmissionFailed: If the chain rejects the transaction or cannot be reached
        """
        try:
            self.context.submit_tx(signed_tx)
        except (ApiError, TransactionFailedException, RequestException) as e:
            raise SubmissionFailed(f"Error submitting transaction: {e}") from e

        return signed_tx.id.payload.hex()
