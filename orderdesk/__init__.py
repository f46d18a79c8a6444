"""
Orderdesk: admin dashboard for orders kept in a Sanity content store.
"""

__version__ = "1.0.0"
