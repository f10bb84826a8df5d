"""HTTP routers. Mounted under the configured base URL by ``create_app``."""
