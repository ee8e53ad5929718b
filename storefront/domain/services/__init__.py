"""Domain services for the storefront client."""

from .refresh_coordinator import RefreshCoordinator

__all__ = ["RefreshCoordinator"]
