"""Roster aggregation package."""

from chipsettle.queries.totals import TotalsAggregator

__all__ = ["TotalsAggregator"]
