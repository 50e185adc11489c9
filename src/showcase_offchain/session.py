"""
Session Registry

In-memory correlation between a CIP-68 mint and the update or burn that
follows it in the same session. Entries are keyed by an application chosen
namespace and hold the policy id, asset name and label of the last mint.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Union

from .assets import LABEL_NFT
from .errors import PreconditionFailed


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionLink:
    """Hex policy id, hex (unlabelled) asset name and user-token label of a minted token pair"""

    policy_id: str
    asset_name: str
    label: int = LABEL_NFT

    def to_dict(self) -> Dict[str, Union[str, int]]:
        return asdict(self)


class SessionRegistry:
    """
    Per-session store of the most recent mint.

    Not thread-safe: intents run one at a time.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Union[str, int]]] = {}

    def remember(self, namespace: str, link: SessionLink) -> None:
        """Store the link for a namespace, replacing any previous one"""
        self._entries[namespace] = link.to_dict()
        logger.debug(f"Remembered {link.policy_id}.{link.asset_name} for {namespace}")

    def recall(self, namespace: str) -> SessionLink:
        """
        Get the link stored for a namespace

        Raises:
            PreconditionFailed: If nothing was minted in this session
        """
        entry = self._entries.get(namespace)
        if not entry:
            raise PreconditionFailed("Found no CIP-68 data in the current session. Must mint first!")
        return SessionLink(**entry)

    def forget(self, namespace: str) -> bool:
        """
        Remove the link for a namespace

        Returns:
            True if an entry was removed, False if there was none
        """
        return self._entries.pop(namespace, None) is not None

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._entries
