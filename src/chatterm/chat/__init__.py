"""Conversation data model."""

from .models import Message, Role

__all__ = ["Message", "Role"]
