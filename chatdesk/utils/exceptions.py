"""Custom exceptions for the chatdesk messaging service"""

from typing import Optional


class ChatDeskError(Exception):
    """Base exception for chatdesk"""
    pass


class StorageError(ChatDeskError):
    """Data store read/write failure"""
    pass


class PasswordTakenError(StorageError):
    """Signup password already belongs to another user"""

    def __init__(self, message: str = "Password is already in use", user_id: Optional[str] = None):
        self.user_id = user_id
        super().__init__(message)


class ConfigError(ChatDeskError):
    """Configuration error"""
    pass
