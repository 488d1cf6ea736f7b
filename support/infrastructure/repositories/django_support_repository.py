"""
Django implementation of SupportRepository port.
"""

from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateSupportError
from support.domain.support_grant import SupportGrant
from support.infrastructure.models import SupportGrant as SupportGrantModel
from support.ports.support_repository import SupportRepository


class DjangoSupportRepository(SupportRepository):
    """Django ORM implementation of SupportRepository."""

    def _to_domain(self, model: SupportGrantModel) -> SupportGrant:
        return SupportGrant(
            id=model.id,
            user_id=model.user_id,
            added_by=model.added_by,
            added_at=model.added_at,
        )

    def _to_model(self, grant: SupportGrant) -> SupportGrantModel:
        return SupportGrantModel(
            id=grant.id,
            user_id=grant.user_id,
            added_by=grant.added_by,
            added_at=grant.added_at,
        )

    @sync_to_async
    def add(self, grant: SupportGrant) -> SupportGrant:
        """
        Insert a support grant.

        Args:
            grant: SupportGrant entity

        Returns:
            Saved SupportGrant

        Raises:
            DuplicateSupportError: If the user is already support staff
        """
        model = self._to_model(grant)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateSupportError() from e
        return self._to_domain(model)

    @sync_to_async
    def ensure(self, grant: SupportGrant) -> None:
        """
        Insert-or-ignore a grant.

        Concurrent bootstraps may race on the same user id; the
        unique constraint keeps a single row.
        """
        SupportGrantModel.objects.bulk_create([self._to_model(grant)], ignore_conflicts=True)

    @sync_to_async
    def remove(self, user_id: str) -> bool:
        deleted, _ = SupportGrantModel.objects.filter(user_id=user_id).delete()
        return deleted > 0

    @sync_to_async
    def find_by_user_id(self, user_id: str) -> Optional[SupportGrant]:
        """
        Find a grant by user id.

        Args:
            user_id: User id

        Returns:
            SupportGrant entity or None if not found
        """
        try:
            model = SupportGrantModel.objects.get(user_id=user_id)
            return self._to_domain(model)
        except SupportGrantModel.DoesNotExist:
            return None

    @sync_to_async
    def is_support(self, user_id: str) -> bool:
        return SupportGrantModel.objects.filter(user_id=user_id).exists()

    @sync_to_async
    def list_all(self) -> List[SupportGrant]:
        models = SupportGrantModel.objects.order_by("-added_at")
        return [self._to_domain(model) for model in models]
