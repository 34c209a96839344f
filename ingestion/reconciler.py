"""Pairing of the two legs of transfers between accounts.

QIF records a transfer twice, once in each account's transaction list, with
nothing linking the two records. A leg is matched to the other one by its
transfer key: (account, peer account, date, amount, category, memo). The
first leg seen waits under its own key; the second leg looks for a waiting
leg under the mirrored key (accounts swapped, amount negated). Identical
transfers pair off last-in first-out.
"""

from typing import Dict, List

from logger import get_logger
from models.transaction import Transaction, TransferKey

logger = get_logger("reconciler")


class TransferReconciler:
    """Tracks transfer legs waiting for their peer during one import run.

    Args:
        context: The import context, used to insert and update records.
    """

    def __init__(self, context):
        self.context = context
        self.waiting: Dict[TransferKey, List[Transaction]] = {}

    def insert(self, leg: Transaction) -> int:
        """Insert a transfer leg, linking it with its peer when one is waiting.

        A leg that finds its peer adopts the peer's id and uuid before being
        inserted; the peer's record is then patched with the new leg's id.
        A leg without a waiting peer is inserted and starts waiting itself.

        Returns:
            The id assigned to the leg.
        """
        peer_key = leg.peer_transfer_key()
        candidates = self.waiting.get(peer_key)

        if not candidates:
            leg_id = self.context.insert(leg)
            self.waiting.setdefault(leg.transfer_key(), []).append(leg)
            return leg_id

        peer = candidates[-1]
        leg.transfer_peer = peer.id
        leg.uuid = peer.uuid
        leg_id = self.context.insert(leg)

        candidates.pop()
        if not candidates:
            del self.waiting[peer_key]

        peer.transfer_peer = leg_id
        self.context.update(peer.id, {"transfer_peer": leg_id})
        logger.debug(f"Paired transfer {leg_id} with {peer.id}")
        return leg_id

    def unmatched(self) -> List[Transaction]:
        """Legs still waiting for a peer, in registration order per key."""
        return [leg for legs in self.waiting.values() for leg in legs]
