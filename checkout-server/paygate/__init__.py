"""Checkout server: hosted-checkout payment intake and webhook reconciliation."""

__version__ = "0.1.0"
