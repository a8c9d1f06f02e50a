"""
Pydantic schema definitions for API payloads.

Each domain (services, appointments) defines its own Pydantic models
for request and response bodies.  Schemas are separated from the
repository records to decouple API representation from persistence.
"""
