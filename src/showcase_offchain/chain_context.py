"""
Cardano Chain Context Management

Handles network configuration and blockchain connection setup.
"""

from typing import Optional

from blockfrost import ApiUrls, BlockFrostApi
import pycardano as pc

from .config import Settings, get_settings


class CardanoChainContext:
    """Manages Cardano chain context and network configuration"""

    def __init__(self, network: str = "testnet", blockfrost_api_key: Optional[str] = None):
        """
        Initialize chain context

        Args:
            network: Network type ("testnet" or "mainnet")
            blockfrost_api_key: BlockFrost API key for chain queries
        """
        self.network = network
        self.blockfrost_api_key = blockfrost_api_key

        # Set network configuration
        if network == "testnet":
            self.base_url = ApiUrls.preview.value
            self.cardano_network = pc.Network.TESTNET
            self.cardanoscan = "https://preview.cardanoscan.io"
        else:
            self.base_url = ApiUrls.mainnet.value
            self.cardano_network = pc.Network.MAINNET
            self.cardanoscan = "https://cardanoscan.io"

        if not blockfrost_api_key:
            raise ValueError("BlockFrost API key required for chain context")

        self.api = BlockFrostApi(project_id=blockfrost_api_key, base_url=self.base_url)
        self.context = pc.BlockFrostChainContext(project_id=blockfrost_api_key, base_url=self.base_url)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CardanoChainContext":
        settings = settings or get_settings()
        return cls(settings.network, settings.blockfrost_api_key)

    def get_context(self) -> pc.ChainContext:
        """Get the chain context"""
        return self.context

    def get_api(self) -> BlockFrostApi:
        """Get the BlockFrost API instance"""
        return self.api

    def get_explorer_url(self, tx_id: str) -> str:
        """
        Get explorer URL for transaction

        Args:
            tx_id: Transaction ID

        Returns:
            Explorer URL for the transaction
        """
        return f"{self.cardanoscan}/transaction/{tx_id}"
