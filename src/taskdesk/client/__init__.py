"""
Client package: REST client, session bootstrap and route dispatch.

Keep package import side-effects to a minimum; ``taskdesk.main`` imports
``client.demo`` for seeding.
"""

__all__ = [
    "api",
    "config",
    "demo",
    "identity",
    "override",
    "routing",
    "session",
]
