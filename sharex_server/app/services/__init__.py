"""Request-independent logic behind the routers.

Services raise the error types from ``sharex_server.app.exceptions`` and never
build HTTP responses themselves.
"""
