"""
DeleteApplicationCommand.
"""

from dataclasses import dataclass


@dataclass
class DeleteApplicationCommand:
    """
    Command to delete an application by name.

    Deleting an application cascades to all of its keys.
    """

    requester_id: str
    name: str
