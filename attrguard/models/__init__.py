"""Bundled host model."""

from attrguard.models.model import Model

__all__ = ["Model"]
