"""
CreateApplicationCommand.

Command to register a new application under the caller's quota.
"""

from dataclasses import dataclass


@dataclass
class CreateApplicationCommand:
    """Command to create an application."""

    owner_id: str
    name: str
