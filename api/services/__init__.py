"""
CFIP Services Module
"""

from .emissions_service import EmissionsService

__all__ = [
    "EmissionsService",
]
