"""
Adapters layer - External integrations (IANA timezone database).
"""

from .zone_converter import ZoneConverter

__all__ = ["ZoneConverter"]
