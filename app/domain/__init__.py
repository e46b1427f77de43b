"""
Domain layer for the Sports Store cart service.

This layer contains business entities, value objects, and domain logic
following Domain-Driven Design principles.
"""
