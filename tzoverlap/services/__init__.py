"""
Service layer helpers that orchestrate domain logic.
"""

from .overlap_finder import OverlapFinderService, OverlapReport

__all__ = ["OverlapFinderService", "OverlapReport"]
