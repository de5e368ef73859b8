"""
Streamlit Frontend for Finance Tracker

A single page: totals at the top, an add/edit form, and the list of
entries with a filter.

DESIGN PRINCIPLES:
1. The page holds no ledger state of its own, only the store's snapshot
2. Every form submit goes through the store's validation
3. Clear error messages in simple language
4. Storage problems are shown, never hidden
"""

import warnings

import streamlit as st

from finance_tracker.config import get_settings
from finance_tracker.errors import NotFoundError, PersistenceWarning, ValidationError
from finance_tracker.factory import create_ledger_store
from finance_tracker.formatting import format_amount, format_totals
from finance_tracker.models.entry import EntryFilter, EntryKind
from finance_tracker.validation import get_user_friendly_summary


# Page configuration
st.set_page_config(
    page_title="Income & Expense Tracker",
    page_icon="💰",
    layout="wide",
)

FILTER_LABELS = {
    EntryFilter.ALL: "All",
    EntryFilter.INCOME_ONLY: "Income",
    EntryFilter.EXPENSE_ONLY: "Expenses",
}


@st.cache_resource
def get_store():
    """Get or create the ledger store (cached for the session)."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", PersistenceWarning)
        store = create_ledger_store()
    for warning in caught:
        st.session_state.storage_warning = str(warning.message)
    return store


def run_store_action(action, *args):
    """Run a store mutation, surfacing persistence warnings on the page."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", PersistenceWarning)
        result = action(*args)
    for warning in caught:
        st.session_state.storage_warning = str(warning.message)
    return result


# Widget values can only be changed before the widgets are drawn, so form
# changes are queued here and applied at the top of the next run.

def reset_form():
    st.session_state.editing_id = None
    st.session_state.pending_form = {
        "form_description": "",
        "form_amount": "",
        "form_kind": EntryKind.INCOME.value,
    }


def start_edit(store, entry_id: str):
    try:
        entry = store.get(entry_id)
    except NotFoundError:
        reset_form()
        return
    st.session_state.editing_id = entry.id
    st.session_state.pending_form = {
        "form_description": entry.description,
        "form_amount": str(entry.amount),
        "form_kind": entry.kind.value,
    }


def apply_pending_form():
    pending = st.session_state.pop("pending_form", None)
    if pending:
        for key, value in pending.items():
            st.session_state[key] = value


def render_totals(store, symbol: str):
    snapshot = store.snapshot()
    formatted = format_totals(snapshot.totals, symbol)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("📈 Total Income", formatted["total_income"])
    with col2:
        st.metric("📉 Total Expenses", formatted["total_expense"])
    with col3:
        st.metric("💵 Net Balance", formatted["net_balance"])
        if snapshot.totals.net_balance < 0:
            st.error("You are spending more than you earn.")


def render_form(store):
    editing = st.session_state.editing_id is not None
    st.subheader("✏️ Edit Entry" if editing else "➕ Add New Entry")

    with st.form("entry_form", clear_on_submit=False):
        description = st.text_input(
            "Description",
            key="form_description",
            placeholder="e.g. Salary, Groceries",
        )
        amount = st.text_input(
            "Amount",
            key="form_amount",
            placeholder="0.00",
        )
        kind = st.radio(
            "Type",
            [EntryKind.INCOME.value, EntryKind.EXPENSE.value],
            key="form_kind",
            format_func=str.capitalize,
            horizontal=True,
        )
        submitted = st.form_submit_button(
            "💾 Update" if editing else "➕ Add",
            type="primary",
        )

    if editing and st.button("✖️ Cancel"):
        reset_form()
        st.rerun()

    if not submitted:
        return

    try:
        if editing:
            run_store_action(
                store.update, st.session_state.editing_id, description, amount, kind
            )
        else:
            run_store_action(store.create, description, amount, kind)
    except ValidationError as e:
        st.error(get_user_friendly_summary(e))
        return
    except NotFoundError:
        st.warning("That entry no longer exists.")

    reset_form()
    st.rerun()


def render_entries(store, symbol: str):
    st.subheader("📋 Transactions")

    selected = st.radio(
        "Show",
        list(FILTER_LABELS),
        format_func=FILTER_LABELS.get,
        horizontal=True,
        key="entry_filter",
    )

    entries = store.list_entries(selected)
    if not entries:
        st.info("No entries found. Add your first transaction above.")
        return

    header = st.columns([2, 4, 2, 2, 1, 1])
    for column, title in zip(header, ["Date", "Description", "Type", "Amount", "", ""]):
        column.markdown(f"**{title}**")

    for entry in entries:
        cols = st.columns([2, 4, 2, 2, 1, 1])
        cols[0].write(entry.date.isoformat())
        cols[1].write(entry.description)
        cols[2].write(entry.kind.value.capitalize())
        sign = "+" if entry.kind == EntryKind.INCOME else "-"
        cols[3].write(f"{sign}{format_amount(entry.amount, symbol)}")
        if cols[4].button("✏️", key=f"edit-{entry.id}"):
            start_edit(store, entry.id)
            st.rerun()
        if cols[5].button("🗑️", key=f"delete-{entry.id}"):
            run_store_action(store.delete, entry.id)
            if st.session_state.editing_id == entry.id:
                reset_form()
            st.rerun()


def main():
    """Main application entry point."""
    if "editing_id" not in st.session_state:
        reset_form()
    apply_pending_form()

    symbol = get_settings().app.currency_symbol
    store = get_store()

    st.title("💰 Income & Expense Tracker")

    if st.session_state.get("storage_warning"):
        st.warning(f"⚠️ {st.session_state.storage_warning}")

    render_totals(store, symbol)
    st.markdown("---")
    render_form(store)
    st.markdown("---")
    render_entries(store, symbol)


if __name__ == "__main__":
    main()
