"""
Showcase Actions

One handler per intent. Each handler validates its input, resolves scripts,
selects UTxOs, assembles the transaction, then signs and submits it. The
outcome is reported once: the transaction id through ``on_result`` or the
first error through ``on_error``.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

import pycardano as pc
from opshin.prelude import TxId, TxOutRef

from showcase_contracts.types import BurnAction, MintAction, UpdateAction

from .assets import (
    LABEL_FT,
    LABEL_NFT,
    LABEL_REFERENCE,
    LABEL_RFT,
    derive_asset_name,
    from_text,
    output_references,
    to_unit,
)
from .chain_context import CardanoChainContext
from .config import Settings, configure_logging, get_settings
from .encoding import Shape, cip68_datum, sha256_hex, void
from .errors import NotFound, PreconditionFailed, ValidationFailed
from .intents import Burn, Contract, Intent, Lock, Mint, Transfer, Unlock, Update
from .ledger import LedgerQuery
from .partition import partition
from .scripts import ResolvedScript, ScriptResolver, ScriptTemplate
from .session import SessionLink, SessionRegistry
from .transactions import DraftTransaction, TransactionAssembler
from .utxos import datum_equals, filter_utxos, holding_unit, select_at, select_by_unit, without_script_ref
from .wallet import CardanoWallet


logger = logging.getLogger(__name__)

ResultCallback = Callable[[str], None]
ErrorCallback = Callable[[Exception], None]

# Number of outputs each lock is spread over
SPLIT_COUNTS = {
    Contract.CHECK_DATUM: 100,
    Contract.CHECK_REDEEMER: 75,
    Contract.SC_WALLET: 50,
    Contract.RECEIPTS: 25,
}

CHECK_DATUM_VALUE = 42

USER_TOKEN_LABELS = (LABEL_NFT, LABEL_FT, LABEL_RFT)


def _parse_address(value: Optional[str], field: str) -> pc.Address:
    if not value:
        raise ValidationFailed(f"{field} is required")
    try:
        return pc.Address.from_primitive(value)
    except Exception as e:
        raise ValidationFailed(f"Invalid {field}: {value}") from e


def _require_secret(secret: Optional[str]) -> str:
    if not secret:
        raise ValidationFailed("Secret is required")
    return secret


def _require_positive(lovelace: int) -> int:
    if lovelace <= 0:
        raise ValidationFailed(f"Amount must be positive, got {lovelace}")
    return lovelace


class ShowcaseActions:
    """Entry point for the UI: dispatches intents to their transaction recipes"""

    def __init__(
        self,
        wallet: CardanoWallet,
        ledger: LedgerQuery,
        assembler: TransactionAssembler,
        resolver: ScriptResolver,
        registry: Optional[SessionRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize actions

        Args:
            wallet: Signer funding every transaction
            ledger: Chain lookups
            assembler: Transaction assembler
            resolver: Script template resolver
            registry: Session registry shared by mint and update/burn
            settings: Settings (namespace, chunk floor)
        """
        self.wallet = wallet
        self.ledger = ledger
        self.assembler = assembler
        self.resolver = resolver
        self.registry = registry if registry is not None else SessionRegistry()
        self.settings = settings or get_settings()
        self.namespace = self.settings.session_namespace

        self._handlers: Dict[type, Callable[..., str]] = {
            Transfer: self.transfer,
            Lock: self.lock,
            Unlock: self.unlock,
            Mint: self.mint,
            Update: self.update,
            Burn: self.burn,
        }

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, registry: Optional[SessionRegistry] = None
    ) -> "ShowcaseActions":
        """Wire up BlockFrost, the wallet and the assembler from environment settings"""
        settings = settings or get_settings()
        configure_logging(settings)
        chain_context = CardanoChainContext.from_settings(settings)
        return cls(
            wallet=CardanoWallet.from_settings(settings),
            ledger=LedgerQuery(chain_context),
            assembler=TransactionAssembler(chain_context.get_context(), settings),
            resolver=ScriptResolver(chain_context.cardano_network),
            registry=registry,
            settings=settings,
        )

    def dispatch(self, intent: Intent, on_result: ResultCallback, on_error: ErrorCallback) -> None:
        """
        Run one intent to completion and report its outcome exactly once

        Args:
            intent: The operation to perform
            on_result: Called with the transaction id on success
            on_error: Called with the exception on failure
        """
        handler = self._handlers.get(type(intent))
        logger.info(f"Running {type(intent).__name__} intent")

        try:
            if handler is None:
                raise ValidationFailed(f"Unsupported intent: {type(intent).__name__}")
            tx_id = handler(intent)
        except Exception as e:
            logger.error(f"{type(intent).__name__} failed: {e}")
            on_error(e)
            return

        logger.info(f"{type(intent).__name__} submitted: {tx_id}")
        on_result(tx_id)

    def _sign_and_submit(self, draft: DraftTransaction) -> str:
        signed_tx = self.assembler.finalize(draft, [self.wallet.signing_key])
        return self.assembler.submit(signed_tx)

    ################################################
    # No smart-contract interaction
    ################################################

    def transfer(self, intent: Transfer) -> str:
        to_address = _parse_address(intent.to_address, "destination address")
        lovelace = _require_positive(intent.lovelace)

        draft = self.assembler.assemble_transfer(self.wallet.address, to_address, lovelace)
        return self._sign_and_submit(draft)

    ################################################
    # Lock / unlock
    ################################################

    def _receipt_scripts(self, owner: bytes) -> Tuple[ResolvedScript, ResolvedScript]:
        """Receipt spending validator and minting policy for an owner key hash"""
        policy = self.resolver.resolve(ScriptTemplate.RECEIPTS_NFT, [owner])
        validator = self.resolver.resolve(ScriptTemplate.RECEIPTS, [policy.policy_id.payload])
        return validator, policy

    def _lock_target(self, intent: Lock) -> Tuple[ResolvedScript, pc.Datum]:
        """Script and datum a lock pays to"""
        contract = intent.contract
        if contract == Contract.CHECK_DATUM:
            return self.resolver.resolve(ScriptTemplate.CHECK_DATUM), CHECK_DATUM_VALUE
        if contract == Contract.CHECK_REDEEMER:
            commitment = bytes.fromhex(sha256_hex(_require_secret(intent.secret)))
            return self.resolver.resolve(ScriptTemplate.CHECK_REDEEMER), commitment
        if contract == Contract.SC_WALLET:
            return self.resolver.resolve(ScriptTemplate.SC_WALLET, [self.wallet.pkh]), void()
        if contract == Contract.RECEIPTS:
            validator, _ = self._receipt_scripts(self.wallet.pkh)
            return validator, void()
        if contract == Contract.ADMIN:
            beneficiary = _parse_address(intent.beneficiary_address, "beneficiary address")
            return self.resolver.resolve(ScriptTemplate.ADMIN, [self.wallet.pkh]), beneficiary.payment_part.payload
        raise ValidationFailed(f"Unsupported contract: {contract}")

    def lock(self, intent: Lock) -> str:
        """
        Lock lovelace at a contract address

        Every contract except ADMIN spreads the amount over several outputs.
        """
        lovelace = _require_positive(intent.lovelace)
        script, datum = self._lock_target(intent)

        if intent.contract == Contract.ADMIN:
            chunks = [lovelace]
        else:
            chunks = partition(lovelace, self.settings.min_chunk_lovelace, SPLIT_COUNTS[intent.contract])

        logger.debug(f"Locking {lovelace} lovelace at {script.address} in {len(chunks)} output(s)")
        draft = self.assembler.assemble_lock(self.wallet.address, script, datum, chunks)
        return self._sign_and_submit(draft)

    def unlock(self, intent: Unlock) -> str:
        """Collect UTxOs from a contract address, minting a receipt for RECEIPTS"""
        contract = intent.contract
        signers: List[pc.VerificationKeyHash] = []

        if contract == Contract.RECEIPTS:
            return self._collect_with_receipt()

        if contract == Contract.CHECK_DATUM:
            script = self.resolver.resolve(ScriptTemplate.CHECK_DATUM)
            utxos = select_at(self.ledger, script.address)
            redeemer = void()

        elif contract == Contract.CHECK_REDEEMER:
            secret = _require_secret(intent.secret)
            commitment = bytes.fromhex(sha256_hex(secret))
            script = self.resolver.resolve(ScriptTemplate.CHECK_REDEEMER)
            utxos = filter_utxos(select_at(self.ledger, script.address), datum_equals(Shape.BYTES, commitment))
            redeemer = from_text(secret)

        elif contract == Contract.SC_WALLET:
            script = self.resolver.resolve(ScriptTemplate.SC_WALLET, [self.wallet.pkh])
            utxos = select_at(self.ledger, script.address)
            redeemer = void()
            signers.append(self.wallet.payment_key_hash)

        elif contract == Contract.ADMIN:
            sender = _parse_address(intent.sender_address, "sender address")
            script = self.resolver.resolve(ScriptTemplate.ADMIN, [sender.payment_part.payload])
            utxos = filter_utxos(
                select_at(self.ledger, script.address),
                without_script_ref(),
                datum_equals(Shape.BYTES, self.wallet.pkh),
            )
            redeemer = void()
            signers.append(self.wallet.payment_key_hash)

        else:
            raise ValidationFailed(f"Unsupported contract: {contract}")

        logger.debug(f"Unlocking {len(utxos)} UTxO(s) from {script.address}")
        draft = self.assembler.assemble_unlock(self.wallet.address, script, utxos, redeemer, signers)
        return self._sign_and_submit(draft)

    def _collect_with_receipt(self) -> str:
        """Collect every receipts lock and mint one receipt named after the consumed references"""
        validator, policy = self._receipt_scripts(self.wallet.pkh)
        utxos = select_at(self.ledger, validator.address)
        asset_name = derive_asset_name(output_references(utxos))

        logger.debug(f"Minting receipt {asset_name.hex()} for {len(utxos)} UTxO(s)")
        draft = self.assembler.assemble_receipt_mint(
            self.wallet.address,
            validator,
            policy,
            utxos,
            void(),
            asset_name,
            self.wallet.payment_key_hash,
        )
        return self._sign_and_submit(draft)

    ################################################
    # CIP-68
    ################################################

    def mint(self, intent: Mint) -> str:
        """
        Mint a CIP-68 reference/user token pair under a fresh one-shot policy

        The first wallet UTxO is consumed as nonce and parameterizes the policy,
        so no two mints share a policy id. The policy id and asset name are
        remembered for a later update or burn.
        """
        datum = cip68_datum(intent.name, intent.image)
        if intent.label not in USER_TOKEN_LABELS:
            raise ValidationFailed(f"Unsupported token label: {intent.label}")
        quantity = 1 if intent.label == LABEL_NFT else intent.quantity
        if quantity <= 0:
            raise ValidationFailed(f"Quantity must be positive, got {quantity}")

        wallet_utxos = self.ledger.utxos_at(self.wallet.address)
        if not wallet_utxos:
            raise PreconditionFailed("Empty user wallet!")
        nonce = wallet_utxos[0]

        oref = TxOutRef(id=TxId(nonce.input.transaction_id.payload), idx=nonce.input.index)
        policy = self.resolver.resolve(ScriptTemplate.CIP68_NFTS, [oref])
        store = self.resolver.resolve(ScriptTemplate.CIP68_STORE, [policy.policy_id.payload])

        asset_name = from_text(intent.name)
        ref_unit = to_unit(policy.policy_id, asset_name, LABEL_REFERENCE)
        if filter_utxos(select_at(self.ledger, store.address), holding_unit(ref_unit)):
            raise PreconditionFailed("Must NOT mint more than 1 reference token")

        draft = self.assembler.assemble_cip68_mint(
            self.wallet.address,
            nonce,
            policy,
            store,
            asset_name,
            intent.label,
            quantity,
            datum,
            MintAction(),
        )
        tx_id = self._sign_and_submit(draft)

        self.registry.remember(self.namespace, SessionLink(policy.policy_id_hex, asset_name.hex(), intent.label))
        return tx_id

    def _user_label(self, link: SessionLink, label: Optional[int]) -> int:
        if label is None:
            return link.label
        if label not in USER_TOKEN_LABELS:
            raise ValidationFailed(f"Unsupported token label: {label}")
        if label != link.label:
            raise PreconditionFailed(f"Token pair was minted with label {link.label}, not {label}")
        return label

    def _token_pair(self, link: SessionLink, label: int) -> Tuple[pc.UTxO, pc.UTxO]:
        asset_name = bytes.fromhex(link.asset_name)
        try:
            ref_utxo = select_by_unit(self.ledger, to_unit(link.policy_id, asset_name, LABEL_REFERENCE))
        except NotFound as e:
            raise PreconditionFailed(f"Reference token of {link.policy_id}.{link.asset_name} not found") from e
        user_utxo = select_by_unit(self.ledger, to_unit(link.policy_id, asset_name, label))
        return ref_utxo, user_utxo

    def update(self, intent: Update) -> str:
        """Rewrite the metadata of the token pair minted in this session"""
        datum = cip68_datum(intent.name, intent.image)
        link = self.registry.recall(self.namespace)
        label = self._user_label(link, intent.label)

        ref_utxo, user_utxo = self._token_pair(link, label)
        validator = self.ledger.script_by_hash(ref_utxo.output.address.payment_part)

        draft = self.assembler.assemble_cip68_update(
            self.wallet.address, ref_utxo, user_utxo, validator, datum, UpdateAction()
        )
        tx_id = self._sign_and_submit(draft)

        self.registry.forget(self.namespace)
        return tx_id

    def burn(self, intent: Burn) -> str:
        """Burn the reference token and user token minted in this session"""
        link = self.registry.recall(self.namespace)
        label = self._user_label(link, intent.label)

        ref_utxo, user_utxo = self._token_pair(link, label)
        validator = self.ledger.script_by_hash(ref_utxo.output.address.payment_part)
        policy = self.ledger.script_by_hash(link.policy_id)

        draft = self.assembler.assemble_cip68_burn(
            self.wallet.address,
            ref_utxo,
            user_utxo,
            validator,
            policy,
            bytes.fromhex(link.asset_name),
            label,
            BurnAction(),
        )
        tx_id = self._sign_and_submit(draft)

        self.registry.forget(self.namespace)
        return tx_id
