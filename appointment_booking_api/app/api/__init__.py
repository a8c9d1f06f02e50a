"""
API package containing the HTTP routes.

``router`` in ``api/router.py`` bundles the services and appointments
endpoints; ``deps`` provides the service-layer objects they depend on.
"""
