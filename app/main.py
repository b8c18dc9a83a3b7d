"""
Streamlit Frontend for Chip Settle

The page people fill in at the end of a poker night.

DESIGN PRINCIPLES:
1. One row per player: name, buy-in, cash-out
2. Live profit/loss and totals while typing
3. Clear error messages in simple language
4. Transfers and warnings shown together
5. One tap to share the result

The UI owns the editable roster. Everything it shows is computed
from that roster by the chipsettle package on every rerun.
"""

import streamlit as st

from chipsettle.audit import create_correlation_id
from chipsettle.config import get_settings, validate_all_settings
from chipsettle.models.roster import Participant, quantize_amount
from chipsettle.orchestrator import SettlementFlow, create_app_components
from chipsettle.validation import (
    InvalidAmountError,
    SettlementValidationError,
    format_profit,
    format_signed,
)


# Page configuration
st.set_page_config(
    page_title="Chip Settle",
    page_icon="🃏",
    layout="centered",
)


@st.cache_resource
def get_flow() -> SettlementFlow:
    """Get or create the settlement flow (cached)."""
    return create_app_components()


def _empty_row(row_id: int) -> dict:
    return {"id": row_id, "name": "", "entry": "", "exit": ""}


def init_state() -> None:
    if "rows" not in st.session_state:
        st.session_state.rows = [_empty_row(1)]
    if "result" not in st.session_state:
        st.session_state.result = None
    if "error" not in st.session_state:
        st.session_state.error = None
    if "result_roster" not in st.session_state:
        st.session_state.result_roster = None


def add_row() -> None:
    next_id = max((r["id"] for r in st.session_state.rows), default=0) + 1
    st.session_state.rows.append(_empty_row(next_id))


def remove_row(row_id: int) -> None:
    if len(st.session_state.rows) > 1:
        st.session_state.rows = [r for r in st.session_state.rows if r["id"] != row_id]


def reset() -> None:
    # Widget keys outlive their rows; drop them so the inputs come back empty
    for key in list(st.session_state.keys()):
        if str(key).startswith(("name_", "entry_", "exit_")):
            del st.session_state[key]
    st.session_state.rows = [_empty_row(1)]
    st.session_state.result = None
    st.session_state.error = None


def parse_rows() -> tuple[list[Participant], dict[int, str]]:
    """
    Parse the editable rows into participants.

    Returns:
        (participants, {row_id: error_message}) for rows that failed to parse
    """
    participants = []
    errors = {}
    for row in st.session_state.rows:
        try:
            participants.append(
                Participant.from_raw(row["name"], row["entry"], row["exit"], id=row["id"])
            )
        except InvalidAmountError as e:
            errors[row["id"]] = str(e)
    return participants, errors


def render_roster() -> dict:
    """
    Render one editable line per player.

    Returns:
        {row_id: placeholder} for the P/L cells, filled once the rows are parsed
    """
    header = st.columns([4, 3, 3, 2, 1])
    header[0].markdown("**Player**")
    header[1].markdown("**Buy-in**")
    header[2].markdown("**Cash-out**")
    header[3].markdown("**P/L**")

    profit_cells = {}
    for row in st.session_state.rows:
        cols = st.columns([4, 3, 3, 2, 1])
        key = row["id"]
        row["name"] = cols[0].text_input(
            "Player", value=row["name"], key=f"name_{key}", label_visibility="collapsed",
            placeholder="Name",
        )
        row["entry"] = cols[1].text_input(
            "Buy-in", value=row["entry"], key=f"entry_{key}", label_visibility="collapsed",
            placeholder="0",
        )
        row["exit"] = cols[2].text_input(
            "Cash-out", value=row["exit"], key=f"exit_{key}", label_visibility="collapsed",
            placeholder="0",
        )
        profit_cells[key] = cols[3].empty()

        cols[4].button("🗑️", key=f"remove_{key}", on_click=remove_row, args=(key,),
                       disabled=len(st.session_state.rows) <= 1)

    return profit_cells


def render_profits(
    flow: SettlementFlow,
    participants: list[Participant],
    profit_cells: dict,
) -> None:
    """Fill the P/L column. Rows that failed to parse or lack an amount show a dash."""
    profits = {
        participants[index].id: profit
        for index, profit in flow.row_profits(participants).items()
    }

    for row_id, cell in profit_cells.items():
        profit = profits.get(row_id)
        if profit is None:
            cell.markdown("–")
            continue

        # Colour follows the value as displayed, so -0.3 is a plain "0"
        text = format_profit(profit)
        if text.startswith("+"):
            cell.markdown(f":green[{text}]")
        elif text.startswith("-"):
            cell.markdown(f":red[{text}]")
        else:
            cell.markdown(text)


def render_issues(flow: SettlementFlow, participants: list[Participant]) -> None:
    """Live hints about the roster. Blocking problems are only enforced on Calculate."""
    for issue in flow.check_roster(participants):
        icon = "⚠️" if issue.severity == "warning" else "ℹ️"
        st.caption(f"{icon} {issue.message}")


def render_totals(flow: SettlementFlow, participants: list[Participant]) -> None:
    totals = flow.compute_totals(participants)
    symbol = get_settings().settlement.currency_symbol

    cols = st.columns(4)
    cols[0].metric("Players", totals.participant_count)
    cols[1].metric("Buy-ins", f"{symbol}{quantize_amount(totals.total_entry)}")
    cols[2].metric("Cash-outs", f"{symbol}{quantize_amount(totals.total_exit)}")
    cols[3].metric("Difference", f"{symbol}{format_signed(totals.net)}")


def render_result(flow: SettlementFlow) -> None:
    result = st.session_state.result

    # Markdown needs two trailing spaces for a line break
    summary = flow.summarize(result).replace("\n", "  \n")
    if result.has_warning:
        st.warning(summary)
    else:
        st.success(summary)

    if result.is_settled:
        return

    with st.expander("📤 Share"):
        correlation_id = create_correlation_id()
        st.code(flow.share(result, "text", correlation_id=correlation_id), language=None)
        cols = st.columns(3)
        cols[0].link_button("WhatsApp", flow.share(result, "whatsapp", correlation_id=correlation_id))
        cols[1].link_button("Telegram", flow.share(result, "telegram", correlation_id=correlation_id))
        cols[2].link_button("E-mail", flow.share(result, "email", correlation_id=correlation_id))

    if get_settings().app.debug_mode:
        with st.expander("🔍 Net balances"):
            st.json({b.name: str(b.balance) for b in result.balances})


def render_settings_status() -> None:
    """Configuration check shown in the sidebar."""
    st.sidebar.markdown("### Configuration")

    status = validate_all_settings()
    sections = [
        ("Settlement", "settlement"),
        ("Application", "app"),
    ]
    for name, key in sections:
        if status.get(key, False):
            st.sidebar.success(f"✅ {name}")
        else:
            error = status.get(f"{key}_error", "Invalid configuration")
            st.sidebar.error(f"❌ {name} - {error}")


def main():
    """Main application entry point."""
    init_state()
    render_settings_status()
    flow = get_flow()

    st.title("🃏 Chip Settle")
    st.caption("Settle up at the end of the night")

    profit_cells = render_roster()

    col1, col2 = st.columns(2)
    col1.button("➕ Add player", on_click=add_row)
    col2.button("↺ Start over", on_click=reset)

    participants, parse_errors = parse_rows()
    render_profits(flow, participants, profit_cells)

    # Any edit invalidates the last result
    if st.session_state.result_roster != participants:
        st.session_state.result = None
        st.session_state.error = None

    for message in parse_errors.values():
        st.error(message)
    if not parse_errors:
        render_issues(flow, participants)

    render_totals(flow, participants)

    st.markdown("---")

    if st.button("Calculate transfers", type="primary", disabled=bool(parse_errors)):
        st.session_state.error = None
        st.session_state.result = None
        st.session_state.result_roster = participants
        try:
            st.session_state.result = flow.compute_settlement(participants)
        except SettlementValidationError as e:
            st.session_state.error = e.user_message
        except Exception as e:
            # Already recorded in the audit log by the flow
            st.session_state.error = f"Something went wrong: {e}"

    if st.session_state.error:
        st.error(st.session_state.error)
    elif st.session_state.result is not None:
        render_result(flow)


if __name__ == "__main__":
    main()
