"""
transfers.py - Moving value out of the vault

The vault never moves value itself; it hands Transfer records to a TransferSink.
An operation may need more than one transfer (an emergency withdrawal pays a
penalty to the administrator and the remainder to the caller). Those legs are
independent, so execute_transfers() sends them in order and, if a later leg
fails, refunds every leg that already went out before raising TransferFailed.
Either every transfer of an operation lands or none does. A refund that itself
fails does not stop the remaining refunds; the leg is reported on the raised
TransferFailed as unrefunded.

RecordingTransferSink is the in-memory sink used by default: it records every
send and refund and can be told to fail for chosen recipients.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

from .core import Transfer, TransferSink, TransferFailed


def execute_transfers(sink: TransferSink, transfers: Iterable[Transfer]) -> None:
    """
    Send each transfer through sink, compensating on failure.

    Args:
        sink: The transfer primitive
        transfers: Transfers to send, in order

    Raises:
        TransferFailed: if any send fails. Completed legs have been refunded;
            any leg whose refund also failed is listed in .unrefunded
    """
    completed: List[Transfer] = []
    for transfer in transfers:
        try:
            sink.send(transfer)
        except Exception as exc:
            unrefunded = _refund_all(sink, completed)
            message = f"transfer to {transfer.recipient} failed: {exc}"
            if unrefunded:
                message += f"; refunds failed for {list(unrefunded)}"
            raise TransferFailed(message, unrefunded) from exc
        completed.append(transfer)


def _refund_all(sink: TransferSink, completed: List[Transfer]) -> Tuple[Transfer, ...]:
    """Refund completed legs newest first. Returns the legs that could not be refunded."""
    unrefunded: List[Transfer] = []
    for done in reversed(completed):
        try:
            sink.refund(done)
        except Exception:
            unrefunded.append(done)
    return tuple(unrefunded)


class RecordingTransferSink:
    """
    In-memory TransferSink.

    Keeps a running total of value received per recipient and a full history of
    sends and refunds. Recipients added with fail_for() reject every send.

    Example:
        sink = RecordingTransferSink()
        sink.fail_for("mallory")
        vault = Vault(config, transfer_sink=sink)
    """

    def __init__(self):
        self.received: Dict[str, int] = defaultdict(int)
        self.sent: List[Transfer] = []
        self.refunded: List[Transfer] = []
        self._failing: Set[str] = set()

    def fail_for(self, recipient: str) -> None:
        """Make every future send to recipient fail."""
        self._failing.add(recipient)

    def recover(self, recipient: str) -> None:
        """Undo fail_for()."""
        self._failing.discard(recipient)

    def send(self, transfer: Transfer) -> None:
        if transfer.recipient in self._failing:
            raise TransferFailed(f"recipient {transfer.recipient} rejected {transfer.amount}")
        self.received[transfer.recipient] += transfer.amount
        self.sent.append(transfer)

    def refund(self, transfer: Transfer) -> None:
        self.received[transfer.recipient] -= transfer.amount
        self.refunded.append(transfer)

    def balance_of(self, recipient: str) -> int:
        """Net value delivered to recipient (sends minus refunds)."""
        return self.received.get(recipient, 0)

    @property
    def total_sent(self) -> int:
        """Net value that has left the vault through this sink."""
        return sum(self.received.values())
