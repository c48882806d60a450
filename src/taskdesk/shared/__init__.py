"""
Shared utilities: configuration-aware logging, correlation IDs, exceptions
and base schemas.
"""
