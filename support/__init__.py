"""
Support module - Support staff grants and the permission hierarchy.

This module handles:
- Support grant entity and persistence
- Permission resolution (super-admin > support staff > application owner)
- Support staff management by the super-admin
"""
