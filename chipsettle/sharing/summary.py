"""
Share Summary

Renders a settlement as plain text and builds share links for it.

The text is what people paste into the group chat after the game:

    Poker night summary

    Bob pays Alice ₪60
    Carol pays Alice ₪40

    Total: 2 transfers

Amounts are rounded only here, for display. The engine keeps full precision.
"""

from typing import Optional, Sequence
from urllib.parse import quote

from chipsettle.config import SettlementSettings, get_settings
from chipsettle.models.roster import SettlementResult, Transfer
from chipsettle.validation.validator import mismatch_message


WHATSAPP_SHARE_URL = "https://api.whatsapp.com/send?text={text}"
TELEGRAM_SHARE_URL = "https://t.me/share/url?url=&text={text}"
EMAIL_SHARE_URL = "mailto:?subject={subject}&body={body}"


def _encode(text: str) -> str:
    return quote(text, safe="")


def transfer_count_label(count: int) -> str:
    """'1 transfer', '2 transfers'."""
    return f"{count} transfer{'' if count == 1 else 's'}"


class SummaryFormatter:
    """Formats settlement results for people, not programs."""

    def __init__(self, settings: Optional[SettlementSettings] = None):
        self._settings = settings or get_settings().settlement

    def format_amount(self, transfer: Transfer) -> str:
        places = self._settings.summary_decimal_places
        return f"{self._settings.currency_symbol}{transfer.rounded(places)}"

    def format_transfer_line(self, transfer: Transfer) -> str:
        """'<payer> pays <payee> <amount>'"""
        return f"{transfer.payer} pays {transfer.payee} {self.format_amount(transfer)}"

    def share_text(self, transfers: Sequence[Transfer]) -> str:
        """
        Plain-text summary, one transfer per line.

        Returns an empty string when there is nothing to share.
        """
        if not transfers:
            return ""

        lines = [self._settings.summary_title, ""]
        lines.extend(self.format_transfer_line(t) for t in transfers)
        lines.append("")
        lines.append(f"Total: {transfer_count_label(len(transfers))}")
        return "\n".join(lines)

    def whatsapp_url(self, transfers: Sequence[Transfer]) -> str:
        return WHATSAPP_SHARE_URL.format(text=_encode(self.share_text(transfers)))

    def telegram_url(self, transfers: Sequence[Transfer]) -> str:
        return TELEGRAM_SHARE_URL.format(text=_encode(self.share_text(transfers)))

    def email_url(self, transfers: Sequence[Transfer]) -> str:
        return EMAIL_SHARE_URL.format(
            subject=_encode(self._settings.email_subject),
            body=_encode(self.share_text(transfers)),
        )

    @staticmethod
    def transfer_heading(result: SettlementResult) -> str:
        count = result.transfer_count
        verb = "settles" if count == 1 else "settle"
        return f"{transfer_count_label(count)} {verb} the table:"

    def get_user_friendly_summary(self, result: SettlementResult) -> str:
        """
        Summary of a settlement result for the results panel.

        Shows the transfers and the balance warning together; a warning
        never hides the transfers.
        """
        lines = []

        if result.is_settled:
            lines.append("✅ Everyone is already settled. No transfers needed.")
        else:
            lines.append(f"💸 {self.transfer_heading(result)}")
            for transfer in result.transfers:
                lines.append(f"   • {self.format_transfer_line(transfer)}")

        if result.has_warning:
            lines.append("")
            lines.append(f"⚠️ {mismatch_message(result.balance_warning)}")
            lines.append("Transfers were computed on the amounts as entered.")

        return "\n".join(lines)
