"""Domain models for ct_feeds: pure dataclasses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoundData:
    """One latestRoundData-style reading. Only answer and updated_at are consumed."""

    round_id: int
    answer: int        # price, smallest unit; may be <= 0 on a broken feed
    started_at: int
    updated_at: int    # unix seconds; 0 = never updated
    answered_in_round: int
