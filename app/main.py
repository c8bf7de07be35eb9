"""
Streamlit Frontend for Expensify

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Errors shown next to the field that caused them
3. Every aggregate is recomputed from the tracker on each rerun
4. No hidden actions

Pages:
- Auth: login, signup, forgot password, phone OTP
- Tracker: Overview (totals, donut chart, recent), Add New, History
"""

import asyncio
import time
from datetime import date

import plotly.graph_objects as go
import streamlit as st

from expensify.aggregation import ALL_CATEGORIES, ChartGeometry
from expensify.config import get_settings, validate_all_settings
from expensify.formatting import expense_row_markup, format_currency, format_long_date
from expensify.lifecycle import DisplayState
from expensify.models import CATEGORIES, AuthForm, AuthMode, ExpenseForm, category_names, get_category
from expensify.orchestrator import AuthFlow, create_app_components, create_tracker
from expensify.tracker import ExpenseTracker
from expensify.validation import ValidationError


# Page configuration
st.set_page_config(
    page_title="Expensify",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .hero-amount {
        font-size: 2.5em;
        font-weight: 900;
    }
    .row-new {
        border-left: 4px solid #06D6A0;
        padding-left: 8px;
    }
    .row-out {
        opacity: 0.35;
        text-decoration: line-through;
    }
    .row-note {
        color: #888;
        font-size: 0.85em;
    }
</style>
""", unsafe_allow_html=True)


TABS = ["⬡ Overview", "+ Add New", "≡ History"]


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def get_tracker(storage) -> ExpenseTracker:
    """Get the signed-in user's tracker, loading it on first use."""
    user = st.session_state.user
    tracker = st.session_state.get("tracker")
    if tracker is None or tracker.user_key != user.uid:
        tracker = create_tracker(user, storage)
        run_async(tracker.load())
        st.session_state.tracker = tracker
    return tracker


def main():
    """Main application entry point."""
    try:
        auth_flow, storage = get_components()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    if st.session_state.get("user") is None:
        render_auth_page(auth_flow)
        return

    tracker = get_tracker(storage)
    run_async(tracker.complete_deletions())

    render_sidebar()
    render_header(tracker)

    # Tab switches requested by buttons apply before the radio is drawn
    if "next_tab" in st.session_state:
        st.session_state.tab = st.session_state.pop("next_tab")
    elif "tab" not in st.session_state:
        st.session_state.tab = TABS[0]
    tab = st.radio("View", TABS, key="tab", horizontal=True, label_visibility="collapsed")

    if tab == TABS[0]:
        render_overview(tracker)
    elif tab == TABS[1]:
        render_add_page(tracker)
    else:
        render_history(tracker)

    # Finish pending-deletion transitions on the next rerun
    if tracker.has_pending_deletions:
        time.sleep(tracker.seconds_until_next_removal() or 0)
        st.rerun()


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------

def render_auth_page(auth_flow: AuthFlow):
    """Render login / signup / forgot / otp."""
    st.title("💸 Expensify")
    st.caption("Smart money. Smarter tracking.")

    if "auth_mode" not in st.session_state:
        st.session_state.auth_mode = AuthMode.LOGIN
    mode = st.session_state.auth_mode

    if mode == AuthMode.FORGOT:
        render_forgot_form(auth_flow)
    elif mode == AuthMode.OTP:
        render_otp_form(auth_flow)
    else:
        render_credentials_form(auth_flow, mode)


def switch_auth_mode(mode: AuthMode):
    st.session_state.auth_mode = mode
    st.session_state.auth_result = None
    st.rerun()


def sign_in(user):
    st.session_state.user = user
    st.session_state.auth_result = None
    st.rerun()


def show_field_error(field: str):
    result = st.session_state.get("auth_result")
    if result and field in result.field_errors:
        st.caption(f":red[{result.field_errors[field]}]")


def render_credentials_form(auth_flow: AuthFlow, mode: AuthMode):
    is_signup = mode == AuthMode.SIGNUP
    st.subheader("Create account" if is_signup else "Welcome back")
    st.markdown("Start tracking your expenses today" if is_signup else "Sign in to your account")

    col1, col2 = st.columns(2)
    for col, provider in ((col1, "Google"), (col2, "LinkedIn")):
        with col:
            if st.button(f"Continue with {provider}", use_container_width=True):
                result = run_async(auth_flow.sign_in_with_provider(provider))
                if result.success:
                    sign_in(result.user)
                st.session_state.auth_result = result

    st.markdown("---")
    name = ""
    if is_signup:
        name = st.text_input("Full Name", placeholder="John Doe")
        show_field_error("name")
    email = st.text_input("Email", placeholder="you@example.com")
    show_field_error("email")
    password = st.text_input("Password", type="password", placeholder="Min 6 characters")
    show_field_error("password")

    if not is_signup and st.button("Forgot password?"):
        switch_auth_mode(AuthMode.FORGOT)

    if st.button("Create Account" if is_signup else "Sign In", type="primary", use_container_width=True):
        result = run_async(auth_flow.submit(mode, AuthForm(name=name, email=email, password=password)))
        if result.success:
            sign_in(result.user)
        st.session_state.auth_result = result
        st.rerun()

    result = st.session_state.get("auth_result")
    if result and result.message and not result.success:
        st.error(result.message)

    with st.expander("📱 Use phone number instead"):
        phone = st.text_input("Phone", placeholder="+91 98765 43210")
        show_field_error("phone")
        if st.button("Send OTP"):
            result = run_async(auth_flow.request_otp(phone))
            st.session_state.auth_result = result
            if result.success:
                st.session_state.auth_phone = phone
                st.session_state.auth_mode = AuthMode.OTP
            st.rerun()

    if is_signup:
        st.markdown("Already have an account?")
        if st.button("Sign in"):
            switch_auth_mode(AuthMode.LOGIN)
    else:
        st.markdown("Don't have an account?")
        if st.button("Sign up free"):
            switch_auth_mode(AuthMode.SIGNUP)


def render_forgot_form(auth_flow: AuthFlow):
    st.subheader("Reset Password")
    st.markdown("We'll send a reset link to your email")

    result = st.session_state.get("auth_result")
    if result and result.success:
        st.success(f"📬 {result.message}")
    else:
        email = st.text_input("Email", placeholder="you@example.com")
        show_field_error("email")
        if st.button("Send Reset Link", type="primary", use_container_width=True):
            st.session_state.auth_result = run_async(
                auth_flow.submit(AuthMode.FORGOT, AuthForm(email=email))
            )
            st.rerun()
        if result and result.message:
            st.error(result.message)

    if st.button("← Back to Login"):
        switch_auth_mode(AuthMode.LOGIN)


def render_otp_form(auth_flow: AuthFlow):
    phone = st.session_state.get("auth_phone", "")
    st.subheader("Verify OTP")
    st.markdown(f"Enter the {get_settings().auth.otp_length}-digit code sent to {phone}")

    otp = st.text_input("Code", max_chars=get_settings().auth.otp_length)
    show_field_error("otp")
    if st.button("Verify & Login", type="primary", use_container_width=True):
        result = run_async(auth_flow.submit(AuthMode.OTP, AuthForm(phone=phone, otp=otp)))
        if result.success:
            sign_in(result.user)
        st.session_state.auth_result = result
        st.rerun()

    result = st.session_state.get("auth_result")
    if result and result.message and not result.success:
        st.error(result.message)

    if st.button("← Use different method"):
        switch_auth_mode(AuthMode.LOGIN)


# ----------------------------------------------------------------------
# Tracker
# ----------------------------------------------------------------------

def render_sidebar():
    user = st.session_state.user
    st.sidebar.markdown(f"### 👤 {user.name}")
    if user.email:
        st.sidebar.caption(user.email)
    if st.sidebar.button("Log out"):
        for key in ("user", "tracker", "auth_result", "auth_mode", "tab"):
            st.session_state.pop(key, None)
        st.rerun()

    with st.sidebar.expander("⚙️ Settings"):
        render_settings_status()


def render_settings_status():
    """Show which configuration sections loaded."""
    status = validate_all_settings()
    backend = get_settings().app.storage_backend
    st.markdown(f"Storage: **{backend}**")

    sections = [
        ("App", "app"),
        ("Auth", "auth"),
        ("Google Sheets", "google_sheets"),
    ]
    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name}")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")
    st.caption("Configure with a `.env` file. See `.env.example` for the variables.")


def render_header(tracker: ExpenseTracker):
    """Render the hero card with the headline aggregates."""
    settings = get_settings().app
    summary = tracker.summary()
    symbol = settings.currency_symbol

    st.caption(format_long_date(date.today()))
    st.markdown("**TOTAL EXPENSES**")
    st.markdown(
        f'<div class="hero-amount">{format_currency(summary.total, symbol)}</div>',
        unsafe_allow_html=True,
    )
    col1, col2, col3 = st.columns(3)
    col1.metric("This Month", format_currency(summary.this_month, symbol))
    col2.metric("Transactions", summary.count)
    col3.metric("Avg / txn", format_currency(summary.average, symbol))

    if tracker.last_error:
        warning_col, dismiss_col = st.columns([5, 1])
        warning_col.warning(tracker.last_error)
        if dismiss_col.button("Dismiss", key="dismiss_error"):
            tracker.clear_error()
            st.rerun()


def render_donut(tracker: ExpenseTracker):
    """Draw the donut from the tracker's chart slices."""
    settings = get_settings().app
    geometry = ChartGeometry(
        size=settings.chart_size,
        stroke_width=settings.chart_stroke_width,
        min_arc=settings.chart_min_arc,
    )
    slices = tracker.chart(geometry)
    summary = tracker.summary()
    if not slices:
        st.markdown("◎ No data yet")
        return

    labels = [s.category.name for s in slices]
    values = [s.percent for s in slices]
    colors = [s.category.color for s in slices]

    # Omitted slivers still take their share of the ring, drawn blank
    hidden = 100.0 - sum(values)
    if hidden > 0.01:
        labels.append("")
        values.append(hidden)
        colors.append("rgba(0,0,0,0)")

    fig = go.Figure(go.Pie(
        labels=labels,
        values=values,
        hole=1 - 2 * settings.chart_stroke_width / settings.chart_size,
        sort=False,
        direction="clockwise",
        rotation=90,
        marker={"colors": colors},
        textinfo="none",
        hoverinfo="label+percent",
    ))
    fig.update_layout(
        showlegend=False,
        height=int(settings.chart_size * 1.6),
        margin={"t": 0, "b": 0, "l": 0, "r": 0},
        annotations=[{
            "text": f"SPENT<br><b>{format_currency(summary.total, settings.currency_symbol)}</b>",
            "showarrow": False,
        }],
    )
    st.plotly_chart(fig, use_container_width=True)


def render_overview(tracker: ExpenseTracker):
    settings = get_settings().app
    summary = tracker.summary()

    st.subheader("Spending Breakdown")
    render_donut(tracker)
    for row in summary.breakdown[:settings.breakdown_limit]:
        col1, col2 = st.columns([3, 1])
        col1.markdown(f"{row.category.icon} {row.category.name}")
        col2.markdown(f"**{format_currency(row.total, settings.currency_symbol)}**")
        st.progress(min(float(row.percent), 100.0) / 100)

    st.subheader("Recent Transactions")
    if not len(tracker):
        render_empty_state()
        return
    for expense in tracker.recent(settings.recent_limit):
        render_expense_row(tracker, expense, key_prefix="recent")
    if len(tracker) > settings.recent_limit:
        if st.button(f"View all {len(tracker)} transactions →"):
            st.session_state.next_tab = TABS[2]
            st.rerun()


def render_add_page(tracker: ExpenseTracker):
    st.subheader("New Expense")
    errors = st.session_state.pop("form_errors", {})

    with st.form("new_expense", clear_on_submit=False):
        title = st.text_input("Title", placeholder="e.g. Dinner with friends")
        if "title" in errors:
            st.caption(f":red[{errors['title']}]")

        col1, col2 = st.columns(2)
        with col1:
            amount = st.text_input("Amount (₹)", placeholder="0.00")
            if "amount" in errors:
                st.caption(f":red[{errors['amount']}]")
        with col2:
            spent_on = st.date_input("Date", value=tracker.today())

        category = st.selectbox(
            "Category",
            options=category_names(),
            format_func=lambda name: f"{get_category(name).icon} {name}",
        )
        note = st.text_area("Note (optional)", placeholder="Any details...")
        if "note" in errors:
            st.caption(f":red[{errors['note']}]")

        submitted = st.form_submit_button("Add Expense →", type="primary")

    if submitted:
        form = ExpenseForm(
            title=title,
            amount=amount,
            category=category,
            date=spent_on.isoformat() if spent_on else None,
            note=note,
        )
        try:
            run_async(tracker.add_expense(form))
        except ValidationError as e:
            st.session_state.form_errors = e.errors
            st.rerun()
        st.session_state.next_tab = TABS[0]
        st.rerun()


def render_history(tracker: ExpenseTracker):
    settings = get_settings().app
    options = [ALL_CATEGORIES] + [c.name for c in CATEGORIES]

    col1, col2 = st.columns([2, 1])
    with col1:
        category_filter = st.selectbox(
            "Category",
            options=options,
            format_func=lambda name: "All" if name == ALL_CATEGORIES else f"{get_category(name).icon} {name}",
        )
    with col2:
        picked = st.date_input("Date", value=None)

    filtered = tracker.filtered(category_filter, picked.isoformat() if picked else "")
    filtered_sum = sum((e.amount for e in filtered), 0)

    heading = "All Transactions" if category_filter == ALL_CATEGORIES else category_filter
    st.subheader(heading)
    st.caption(f"{len(filtered)} items · {format_currency(filtered_sum, settings.currency_symbol)}")

    if not filtered:
        render_empty_state()
        return
    for expense in filtered:
        render_expense_row(tracker, expense, key_prefix="history")


def render_expense_row(tracker: ExpenseTracker, expense, key_prefix: str):
    settings = get_settings().app
    category = expense.resolved_category
    state = tracker.display_state(expense.id)
    css = {
        DisplayState.CREATED: "row-new",
        DisplayState.PENDING_DELETION: "row-out",
    }.get(state, "")

    col1, col2, col3 = st.columns([6, 2, 1])
    with col1:
        st.markdown(expense_row_markup(expense, css), unsafe_allow_html=True)
    with col2:
        st.markdown(
            f'<span style="color:{category.color}"><b>'
            f'{format_currency(expense.amount, settings.currency_symbol)}</b></span>',
            unsafe_allow_html=True,
        )
    with col3:
        if st.button("✕", key=f"{key_prefix}-del-{expense.id}", help="Delete",
                     disabled=state == DisplayState.PENDING_DELETION):
            tracker.request_delete(expense.id)
            st.rerun()


def render_empty_state():
    st.markdown("🧾 **No expenses here**")
    st.caption("Start tracking your spending")


if __name__ == "__main__":
    main()
