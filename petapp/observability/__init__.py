"""Lightweight observability helpers.

Request IDs + structlog contextvars, JSON log lines to stdout and server.log,
plus an in-memory metrics snapshot endpoint.
"""
