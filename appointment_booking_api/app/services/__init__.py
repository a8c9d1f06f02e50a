"""
Service layer.

Each service encapsulates the business logic of one domain.  Services
receive their repositories in the constructor, so API handlers and
tests can supply alternative stores without changing the logic here.
"""
