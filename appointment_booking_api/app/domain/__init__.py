"""Booking rules that do not depend on storage or HTTP."""
