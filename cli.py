"""
CLI for Orderdesk.
Start the API server or dashboard, or manage orders from the command line.
"""

import sys
import argparse
from pathlib import Path

# Add project to path
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def _order_session():
    """Build a state and service talking straight to the content store."""
    from orderdesk.core.config import get_config
    from orderdesk.core.logging import setup_logging
    from orderdesk.orders.repository import OrderRepository
    from orderdesk.orders.service import OrderService
    from orderdesk.orders.state import DashboardState

    config = get_config()
    setup_logging(config.log_path, config.get('general', 'log_level', default='INFO'))

    service = OrderService(OrderRepository.from_settings(config.store_settings))
    state = DashboardState()
    result = service.load_orders(state)
    if not result.ok:
        print(f"[ERROR] {result.notification.text}")
        sys.exit(1)
    return state, service


def _report(result) -> int:
    from orderdesk.orders.service import Outcome

    if result.notification:
        note = result.notification
        tag = "[OK]" if note.level == 'success' else "[ERROR]"
        print(f"{tag} {note.title} {note.text}".rstrip())
    return 1 if result.outcome == Outcome.FAILED else 0


def cmd_serve(args):
    """Start the API server."""
    import uvicorn

    print(f"[SERVER] Starting API server on http://{args.host}:{args.port}")
    print(f"   Docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "orderdesk.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload
    )


def cmd_dashboard(args):
    """Start the Streamlit dashboard."""
    import subprocess

    print("[DASHBOARD] Starting dashboard...")
    print("   Note: Make sure the API server is running first!")

    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(project_root / "dashboard.py"),
        "--server.port", str(args.port)
    ])


def cmd_orders_list(args):
    """Print the filtered order table."""
    import pandas as pd
    from orderdesk.dashboard import presenter

    state, _ = _order_session()
    state.status_filter = args.status
    state.search_term = args.search or ""

    orders = state.visible_orders()
    if not orders:
        print("No orders found")
        return 0

    df = pd.DataFrame([
        {
            "Order ID": presenter.short_id(order.id),
            "Customer": presenter.customer_name(order),
            "Total": presenter.format_total(order.total),
            "Date": presenter.format_order_date(order.order_date),
            "Status": presenter.status_label(order.status),
            "Items": len(order.cart_items),
        }
        for order in orders
    ])
    print(df.to_string(index=False))
    print(f"\n{len(orders)} of {len(state.orders)} orders")
    return 0


def cmd_orders_set_status(args):
    """Change one order's status."""
    state, service = _order_session()
    return _report(service.change_status(state, args.order_id, args.status))


def cmd_orders_delete(args):
    """Delete one order after confirmation."""
    state, service = _order_session()

    confirmed = args.yes
    if not confirmed:
        answer = input(f"Delete order {args.order_id}? This cannot be undone [y/N]: ")
        confirmed = answer.strip().lower() in ('y', 'yes')

    result = service.delete_order(state, args.order_id, confirmed)
    if not result.notification:
        print("[CANCELLED] Order not deleted")
    return _report(result)


def main():
    parser = argparse.ArgumentParser(
        description="Orderdesk CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py serve
  python cli.py dashboard
  python cli.py orders list --status pending --search jane
  python cli.py orders set-status <order-id> dispatch
  python cli.py orders delete <order-id>
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0", help="Host to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Dashboard command
    dashboard_parser = subparsers.add_parser("dashboard", help="Start Streamlit dashboard")
    dashboard_parser.add_argument("--port", type=int, default=8501, help="Dashboard port")

    # Orders commands
    orders_parser = subparsers.add_parser("orders", help="Manage orders")
    orders_subparsers = orders_parser.add_subparsers(dest="orders_command")

    list_parser = orders_subparsers.add_parser("list", help="List orders")
    list_parser.add_argument("--status", type=str, default="All",
                             choices=["All", "pending", "dispatch", "success"], help="Status filter")
    list_parser.add_argument("--search", type=str, default=None, help="Name or order id fragment")

    status_parser = orders_subparsers.add_parser("set-status", help="Change an order's status")
    status_parser.add_argument("order_id", help="Order id")
    status_parser.add_argument("status", choices=["pending", "dispatch", "success"], help="New status")

    delete_parser = orders_subparsers.add_parser("delete", help="Delete an order")
    delete_parser.add_argument("order_id", help="Order id")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    args = parser.parse_args()

    from orderdesk.core.config import ConfigError

    try:
        if args.command == "serve":
            cmd_serve(args)
        elif args.command == "dashboard":
            cmd_dashboard(args)
        elif args.command == "orders":
            if args.orders_command == "list":
                sys.exit(cmd_orders_list(args))
            elif args.orders_command == "set-status":
                sys.exit(cmd_orders_set_status(args))
            elif args.orders_command == "delete":
                sys.exit(cmd_orders_delete(args))
            else:
                orders_parser.print_help()
        else:
            parser.print_help()
    except ConfigError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
