"""
Django implementation of ApplicationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count

from applications.domain.application import Application
from applications.infrastructure.models import Application as ApplicationModel
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import DuplicateApplicationNameError


class DjangoApplicationRepository(ApplicationRepository):
    """
    Django ORM implementation of ApplicationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ApplicationModel) -> Application:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Application model

        Returns:
            Application domain entity
        """
        return Application(
            id=model.id,
            name=model.name,
            api_key=model.api_key,
            created_by=model.created_by,
            created_at=model.created_at,
        )

    def _to_model(self, application: Application) -> ApplicationModel:
        """
        Convert domain entity to Django model.

        Args:
            application: Application domain entity

        Returns:
            Django Application model
        """
        return ApplicationModel(
            id=application.id,
            name=application.name,
            api_key=application.api_key,
            created_by=application.created_by,
            created_at=application.created_at,
        )

    @sync_to_async
    def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity

        Raises:
            DuplicateApplicationNameError: If the name is already taken
        """
        model = self._to_model(application)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            if ApplicationModel.objects.filter(name=application.name).exists():
                raise DuplicateApplicationNameError() from e
            raise
        return self._to_domain(model)

    @sync_to_async
    def find_by_name(self, name: str) -> Optional[Application]:
        """
        Find an application by name.

        Args:
            name: Application name

        Returns:
            Application entity or None if not found
        """
        try:
            model = ApplicationModel.objects.get(name=name)
            return self._to_domain(model)
        except ApplicationModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_api_key(self, api_key: str) -> Optional[Application]:
        """
        Find an application by API key.

        Args:
            api_key: Application API key

        Returns:
            Application entity or None if not found
        """
        try:
            model = ApplicationModel.objects.get(api_key=api_key)
            return self._to_domain(model)
        except ApplicationModel.DoesNotExist:
            return None

    @sync_to_async
    def is_owned_by(self, api_key: str, owner_id: str) -> bool:
        return ApplicationModel.objects.filter(api_key=api_key, created_by=owner_id).exists()

    @sync_to_async
    def count_by_owner(self, owner_id: str) -> int:
        return ApplicationModel.objects.filter(created_by=owner_id).count()

    @sync_to_async
    def list_by_owner(self, owner_id: str) -> List[Application]:
        models = ApplicationModel.objects.filter(created_by=owner_id).order_by("-created_at")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_with_key_counts(
        self, owner_id: Optional[str] = None
    ) -> List[Tuple[Application, int]]:
        """
        List applications annotated with their key counts, newest first.

        Args:
            owner_id: Restrict to this owner; all applications when None

        Returns:
            List of (Application, key_count) tuples
        """
        qs = ApplicationModel.objects.all()
        if owner_id is not None:
            qs = qs.filter(created_by=owner_id)
        qs = qs.annotate(key_count=Count("keys")).order_by("-created_at")
        return [(self._to_domain(model), model.key_count) for model in qs]

    @sync_to_async
    def delete(self, application_id: uuid.UUID) -> bool:
        """
        Delete an application. Keys and their device bindings cascade.

        Args:
            application_id: Application UUID

        Returns:
            True if the application existed
        """
        with transaction.atomic():
            deleted, _ = ApplicationModel.objects.filter(id=application_id).delete()
        return deleted > 0
