"""Share summary package."""

from chipsettle.sharing.summary import SummaryFormatter, transfer_count_label

__all__ = ["SummaryFormatter", "transfer_count_label"]
