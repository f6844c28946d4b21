"""Application-level models shared by the use cases."""

from .system_info import SystemInfo

__all__ = ["SystemInfo"]
