"""
Licenses module - Key lifecycle management.

This module handles:
- License key entity, key generation and expiration
- Key issuance, banning, deletion and HWID reset
- Key listing and lookup scoped by application
"""
