"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  ``core`` holds settings, database access, logging and the
error taxonomy; ``domain`` the time interval, conflict and validation
rules; ``repositories`` the SQL; ``services`` the booking workflow; and
``api`` the HTTP routes.
"""

from .main import app  # noqa: F401
