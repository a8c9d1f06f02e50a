"""
Top‑level package for the Appointment Booking API.

The package provides no public exports; all functionality lives in
submodules under ``app``, e.g. ``appointment_booking_api.app.main``.
"""

__all__ = []
