"""
Applications module - Application registry.

This module handles:
- Application entity and API key generation
- Per-owner application quota
- Application creation, listing and cascading deletion
"""
