"""Direct messaging use cases: send, inbox, conversation, delete."""

from app.application.use_cases.messages.message_operations import MessageService

__all__ = ["MessageService"]
