"""
Validation DTOs for API responses.
"""
from dataclasses import dataclass


@dataclass
class ValidationResultDTO:
    """DTO for the validate_key response."""

    accepted: bool
    reason: str
    message: str
