"""
Model registry for the activations app.
"""

from activations.infrastructure.models import DeviceBinding  # noqa: F401
