"""
Activations module - Device binding and key redemption.

This module handles:
- Key validation for end-user clients
- Hardware id binding under the per-key device limit
"""
