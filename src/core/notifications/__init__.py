"""Transactional email."""

from core.notifications.brevo import BrevoClient

__all__ = ["BrevoClient"]
