"""Utility functions and helpers."""

from lookin.utils.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_token,
    get_current_user,
)
from lookin.utils.encryption import message_encryption, MessageEncryption
from lookin.utils.tags import toggle_tag
from lookin.utils.timefmt import format_relative_time

__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_token",
    "get_current_user",
    "message_encryption",
    "MessageEncryption",
    "toggle_tag",
    "format_relative_time",
]
