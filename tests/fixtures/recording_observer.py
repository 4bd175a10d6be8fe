"""Payment observers for testing broadcasts."""

from __future__ import annotations

from lndpay.domain.entities import PaymentRow


class RecordingObserver:
    """Keeps every broadcast row in order."""

    def __init__(self) -> None:
        self.rows: list[PaymentRow] = []

    def broadcast(self, row: PaymentRow) -> None:
        self.rows.append(row)


class FailingObserver:
    """Raises on every broadcast."""

    def __init__(self) -> None:
        self.attempts = 0

    def broadcast(self, row: PaymentRow) -> None:
        self.attempts += 1
        raise RuntimeError("observer is down")
