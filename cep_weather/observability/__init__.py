"""Observability helpers shared by the gateway and the resolver.

Request IDs + structlog contextvars, per-app in-memory metrics, and timing of
outbound provider calls. No tracing exporter is wired in.
"""
