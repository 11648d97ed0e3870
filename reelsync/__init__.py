"""Reconcile a media catalog against OMDb metadata."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["EnrichmentService", "Settings", "get_settings"]

_EXPORTS = {
    "EnrichmentService": "reelsync.services.enrichment",
    "Settings": "reelsync.config",
    "get_settings": "reelsync.config",
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name])
        return getattr(module, name)
    raise AttributeError(f"module 'reelsync' has no attribute {name}")
