"""Ingestion layer.

This package contains adapters that turn raw event-history payloads from
the backend into normalized :class:`pytagstate.models.TagEvent` objects.
"""

__all__: list[str] = []
