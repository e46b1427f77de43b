"""
Módulo de acceso a datos del catálogo.

- InMemoryProductRepository: consultas sobre el catálogo de productos
"""

from app.db.product_repository import InMemoryProductRepository

__all__ = ["InMemoryProductRepository"]
