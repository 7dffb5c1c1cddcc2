"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .overlap_finder import AvailabilitySourceProtocol, OverlapFinderService

__all__ = ["AvailabilitySourceProtocol", "OverlapFinderService"]
