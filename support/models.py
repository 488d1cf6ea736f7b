"""
Model registry for the support app.
"""

from support.infrastructure.models import SupportGrant  # noqa: F401
