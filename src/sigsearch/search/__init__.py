"""Search module exports."""

from sigsearch.search.ranking import Hit, rank, score_item

__all__ = ["Hit", "rank", "score_item"]
