from .sharing_service import SharingService

__all__ = ["SharingService"]
