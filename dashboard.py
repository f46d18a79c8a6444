"""
Streamlit Dashboard for Orderdesk.
Search, filter, update and delete orders through the admin API.
"""

import locale
import logging

import streamlit as st

from orderdesk.core.config import get_config
from orderdesk.core.logging import setup_logging
from orderdesk.dashboard import presenter
from orderdesk.dashboard.client import AdminApiClient, AuthError
from orderdesk.orders.service import ActionResult, OrderService
from orderdesk.orders.state import DashboardState
from orderdesk.store.client import StoreError

logger = logging.getLogger(__name__)
config = get_config()

# Page config
st.set_page_config(
    page_title="Order Management",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .status-badge {
        padding: 4px 12px;
        border-radius: 9999px;
        font-size: 12px;
    }
    .status-pending { background-color: #fef9c3; color: #854d0e; }
    .status-dispatch { background-color: #dbeafe; color: #2563eb; }
    .status-success { background-color: #dcfce7; color: #166534; }
    .status-unknown { background-color: #f3f4f6; color: #1f2937; }
    .empty-state {
        text-align: center;
        padding: 40px 0;
        color: #6b7280;
        background: #ffffff;
        border-radius: 8px;
    }
    div[data-testid="stDialog"] button[kind="primary"] {
        background-color: #dd3333;
        border-color: #dd3333;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def init_process():
    """Configure logging and the date locale once per server process."""
    setup_logging(config.log_path, config.get('general', 'log_level', default='INFO'))
    try:
        locale.setlocale(locale.LC_TIME, '')
    except locale.Error as e:
        logger.warning(f"Falling back to the C locale for dates: {e}")


init_process()


def sign_out():
    """Forget the token and everything loaded with it."""
    for key in ('admin_token', 'dashboard_state', 'order_service', 'orders_requested', 'notifications'):
        st.session_state.pop(key, None)


def protected_route() -> bool:
    """Render the login gate until the admin API accepts a token."""
    if st.session_state.get('admin_token'):
        return True

    st.title("🔒 Order Management")
    with st.form("login"):
        token = st.text_input("Admin token", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted and token:
        try:
            AdminApiClient(config.api_base_url, token).check_token()
        except AuthError:
            st.error("❌ Invalid admin token")
            return False
        except StoreError as e:
            st.error(f"❌ {e}")
            return False
        st.session_state.admin_token = token
        st.rerun()
    return False


def get_session():
    """Dashboard state and service, scoped to this browser session."""
    if 'dashboard_state' not in st.session_state:
        client = AdminApiClient(config.api_base_url, st.session_state.admin_token)
        st.session_state.dashboard_state = DashboardState()
        st.session_state.order_service = OrderService(client)
        st.session_state.notifications = []
    return st.session_state.dashboard_state, st.session_state.order_service


def push_result(result: ActionResult):
    """Queue a result's notification for the next render."""
    if result.status_code == 401:
        sign_out()
        return
    if result.notification:
        st.session_state.setdefault('notifications', []).append(result.notification)


def render_notifications():
    """Success toasts dismiss themselves; errors stay until the next action."""
    notifications = st.session_state.get('notifications', [])
    st.session_state.notifications = []
    for note in notifications:
        if note.level == 'success':
            st.toast(f"✅ {note.title} {note.text}".strip())
        else:
            st.error(f"❌ {note.title}: {note.text}")


@st.dialog("Error")
def fetch_error_dialog(message: str):
    st.error(message)
    if st.button("OK", use_container_width=True):
        st.rerun()


@st.dialog("Delete Order")
def confirm_delete(order_id: str):
    st.warning("⚠️ Are you sure you want to delete this order?")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Delete", type="primary", use_container_width=True):
            finish_delete(order_id, confirmed=True)
    with col2:
        if st.button("Cancel", use_container_width=True):
            finish_delete(order_id, confirmed=False)


def finish_delete(order_id: str, confirmed: bool):
    state, service = get_session()
    push_result(service.delete_order(state, order_id, confirmed))
    st.rerun()


def on_status_change(order_id: str, widget_key: str):
    state, service = get_session()
    push_result(service.change_status(state, order_id, st.session_state[widget_key]))


def selector_value(status):
    values = [value for value, _ in presenter.STATUS_OPTIONS]
    return status if status in values else None


def load_orders(state: DashboardState, service: OrderService):
    st.session_state.orders_requested = True
    result = service.load_orders(state)
    if result.status_code == 401:
        sign_out()
        st.rerun()
    if not result.ok:
        fetch_error_dialog(result.notification.text)


def render_order_details(order):
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Customer Details**")
        st.markdown(f"**Phone:** {order.phone}")
        st.markdown(f"**Email:** {order.email}")
        st.markdown(f"**Address:** {presenter.address_line(order)}")
        if order.discount:
            st.markdown(f"**Discount:** {presenter.format_total(order.discount)}")
    with col2:
        st.markdown("**Order Items**")
        items = presenter.cart_items_frame(order)
        if items.empty:
            st.caption("No items")
        else:
            st.dataframe(
                items,
                use_container_width=True,
                hide_index=True,
                column_config={
                    "Image": st.column_config.ImageColumn("Image", width="small"),
                    "Product": st.column_config.TextColumn("Product", width="large"),
                }
            )


ROW_WIDTHS = [1.1, 2, 1, 1.2, 1.1, 1.6, 0.9]


def render_orders_table(state: DashboardState, orders):
    header = st.columns(ROW_WIDTHS)
    for col, title in zip(header, ["Order ID", "Customer", "Total", "Date", "Status", "Actions", ""]):
        if title:
            col.markdown(f"**{title}**")

    status_values = [value for value, _ in presenter.STATUS_OPTIONS]
    status_labels = dict(presenter.STATUS_OPTIONS)

    for order in orders:
        expanded = state.selected_order_id == order.id
        cols = st.columns(ROW_WIDTHS, vertical_alignment="center")

        with cols[0]:
            st.button(
                f"{'▾' if expanded else '▸'} {presenter.short_id(order.id)}",
                key=f"toggle_{order.id}",
                on_click=state.toggle_details,
                args=(order.id,),
            )
        cols[1].write(presenter.customer_name(order))
        cols[2].write(presenter.format_total(order.total))
        cols[3].write(presenter.format_order_date(order.order_date))
        cols[4].markdown(presenter.status_badge_html(order.status), unsafe_allow_html=True)

        widget_key = f"status_{order.id}"
        # Selector always shows the stored status, so a failed change snaps back
        st.session_state[widget_key] = selector_value(order.status)
        with cols[5]:
            st.selectbox(
                "Status",
                status_values,
                key=widget_key,
                format_func=lambda value: status_labels[value],
                placeholder="N/A",
                label_visibility="collapsed",
                on_change=on_status_change,
                args=(order.id, widget_key),
            )
        with cols[6]:
            if st.button("Delete", key=f"delete_{order.id}", type="primary"):
                confirm_delete(order.id)

        if expanded:
            with st.container(border=True):
                render_order_details(order)


# ==================== PAGE ====================
if protected_route():
    state, service = get_session()

    # ==================== SIDEBAR ====================
    st.sidebar.title("🛒 Orderdesk")
    st.sidebar.markdown("---")
    try:
        health = service.store.health()
        st.sidebar.success("✅ API Connected")
        st.sidebar.caption(f"📦 Dataset: {health['project_id']}/{health['dataset']}")
    except StoreError:
        st.sidebar.error("❌ API Offline")

    if st.sidebar.button("🔄 Reload Orders", use_container_width=True):
        load_orders(state, service)
    st.sidebar.button("Sign out", on_click=sign_out, use_container_width=True)

    if not st.session_state.get('orders_requested'):
        load_orders(state, service)

    # ==================== HEADER ====================
    col1, col2, col3 = st.columns([2, 1.5, 1])
    with col1:
        st.title("Order Management")
    with col2:
        state.search_term = st.text_input(
            "Search",
            key="search_term",
            placeholder="Search orders...",
            label_visibility="collapsed",
        )
    with col3:
        filter_labels = dict(presenter.FILTER_OPTIONS)
        filter_values = [value for value, _ in presenter.FILTER_OPTIONS]
        state.status_filter = st.selectbox(
            "Status Filter",
            filter_values,
            key="status_filter",
            format_func=lambda value: filter_labels[value],
            label_visibility="collapsed",
        )

    render_notifications()

    # ==================== ORDERS ====================
    visible = state.visible_orders()
    if visible:
        render_orders_table(state, visible)
    else:
        st.markdown('<div class="empty-state">No orders found</div>', unsafe_allow_html=True)
