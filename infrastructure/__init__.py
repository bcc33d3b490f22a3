"""Infrastructure layer for the memos server.

Modules:
    metrics     Prometheus metrics registry.
"""
