"""
Cardano Wallet

Signer for the showcase: derives the payment key from a BIP39 mnemonic and
exposes the address, payment key hash and signing key used by every intent.
"""

from typing import Optional

import pycardano as pc

from .config import Settings, get_settings


class CardanoWallet:
    """Single-account HD wallet used to fund, sign and receive change"""

    def __init__(self, wallet_mnemonic: str, network: str = "testnet"):
        """
        Initialize wallet from mnemonic

        Args:
            wallet_mnemonic: BIP39 mnemonic phrase
            network: Network type ("testnet" or "mainnet")
        """
        self.network = network
        self.cardano_network = pc.Network.TESTNET if network == "testnet" else pc.Network.MAINNET

        self.wallet = pc.crypto.bip32.HDWallet.from_mnemonic(wallet_mnemonic)

        # Derive payment key, enterprise address only
        self.payment_key = self.wallet.derive_from_path("m/1852'/1815'/0'/0/0")
        self.payment_skey = pc.ExtendedSigningKey.from_hdwallet(self.payment_key)

        self.enterprise_address = pc.Address(
            payment_part=self.payment_skey.to_verification_key().hash(),
            network=self.cardano_network,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CardanoWallet":
        settings = settings or get_settings()
        if not settings.wallet_mnemonic:
            raise ValueError("Wallet mnemonic not provided in environment variables")
        return cls(settings.wallet_mnemonic, settings.network)

    @property
    def address(self) -> pc.Address:
        return self.enterprise_address

    @property
    def payment_key_hash(self) -> pc.VerificationKeyHash:
        return self.payment_skey.to_verification_key().hash()

    @property
    def pkh(self) -> bytes:
        """Raw payment key hash, as used for script parameters and datums"""
        return self.payment_key_hash.payload

    @property
    def signing_key(self) -> pc.ExtendedSigningKey:
        return self.payment_skey
