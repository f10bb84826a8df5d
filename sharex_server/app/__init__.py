"""HTTP application: config, routers, services and the server lifecycle."""
