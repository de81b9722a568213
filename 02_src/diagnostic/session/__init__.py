"""Conversation session module."""

from .session import ConversationSession

__all__ = ["ConversationSession"]
