"""Typed configuration models for the Orama integration."""

from .models import IndexConfig, OramaSettings

__all__ = ["IndexConfig", "OramaSettings"]
