"""
Application domain services.
"""


class ApplicationQuota:
    """Domain service for the per-owner application quota."""

    def __init__(self, max_apps_per_owner: int, admin_allowance: int):
        """
        Initialize quota.

        Args:
            max_apps_per_owner: Applications an ordinary owner may hold
            admin_allowance: Allowance reported for the super-admin
        """
        self.max_apps_per_owner = max_apps_per_owner
        self.admin_allowance = admin_allowance

    def can_create(self, owned_count: int, is_admin: bool) -> bool:
        """Admins are exempt; everyone else is capped."""
        if is_admin:
            return True
        return owned_count < self.max_apps_per_owner

    def limit_for(self, is_admin: bool) -> int:
        """Limit reported to a caller."""
        return self.admin_allowance if is_admin else self.max_apps_per_owner
