"""Role checks for administrative endpoints."""

from .dependencies import AdminRole, require_admin


__all__ = ["AdminRole", "require_admin"]
