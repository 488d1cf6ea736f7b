"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Service configuration
- Infrastructure abstractions (event bus, cache)
- Middleware components and health views
"""
