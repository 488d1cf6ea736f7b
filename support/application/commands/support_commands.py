"""
Support management commands.
"""

from dataclasses import dataclass


@dataclass
class AddSupportCommand:
    """Command for the super-admin to grant support rights to user_id."""

    admin_id: str
    user_id: str


@dataclass
class DeleteSupportCommand:
    """Command for the super-admin to revoke the support rights of user_id."""

    admin_id: str
    user_id: str
