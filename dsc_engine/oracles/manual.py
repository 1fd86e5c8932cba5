"""Manually driven price feed for tests and simulations."""
from __future__ import annotations

import time

from ..constants import FEED_DECIMALS
from ..interfaces import Clock
from ..models import RoundData


class ManualPriceFeed:
    """Aggregator-shaped feed whose answer is pushed by hand."""

    def __init__(
        self,
        initial_answer: int,
        decimals: int = FEED_DECIMALS,
        clock: Clock | None = None,
    ) -> None:
        self.decimals = decimals
        self._clock = clock or (lambda: int(time.time()))
        self._round = RoundData()
        self.update_answer(initial_answer)

    def latest_round_data(self) -> RoundData:
        return self._round

    @property
    def latest_answer(self) -> int:
        return self._round.answer

    def update_answer(self, answer: int) -> None:
        """Publish a new answer stamped with the current clock."""
        now = self._clock()
        round_id = self._round.round_id + 1
        self._round = RoundData(
            round_id=round_id,
            answer=answer,
            started_at=now,
            updated_at=now,
            answered_in_round=round_id,
        )

    def update_round_data(
        self, round_id: int, answer: int, updated_at: int, started_at: int
    ) -> None:
        """Overwrite the latest round verbatim, e.g. to backdate it."""
        self._round = RoundData(
            round_id=round_id,
            answer=answer,
            started_at=started_at,
            updated_at=updated_at,
            answered_in_round=round_id,
        )
