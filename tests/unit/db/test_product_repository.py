"""Tests unitarios para InMemoryProductRepository."""

from decimal import Decimal

import pytest

from app.db import InMemoryProductRepository
from app.domain.models import Product
from app.utils.catalog_loader import load_catalog
from app.utils.error_handler import ProductNotFoundException, ValidationException


class TestProductRepository:
    def test_products_in_insertion_order(self, product_repository, p1, p2, p3):
        assert list(product_repository.products) == [p1, p2, p3]

    def test_get_by_id(self, product_repository, p2):
        """Debe encontrar productos por id y devolver None si no existen."""
        assert product_repository.get_by_id(2) == p2
        assert product_repository.get_by_id(99) is None

    def test_require_by_id_raises(self, product_repository):
        """Debe lanzar ProductNotFoundException para ids desconocidos."""
        with pytest.raises(ProductNotFoundException) as exc_info:
            product_repository.require_by_id(99)

        assert exc_info.value.status_code == 404

    def test_categories_sorted_and_distinct(self, product_repository):
        assert product_repository.categories() == ["Apples", "Oranges"]

    def test_list_products_pages(self):
        """Debe paginar los productos ordenados por id."""
        repository = InMemoryProductRepository(
            Product(product_id=i, name=f"P{i}", price=Decimal(i)) for i in range(5, 0, -1)
        )

        listing = repository.list_products(page=2, page_size=2)

        assert [product.product_id for product in listing["products"]] == [3, 4]
        assert listing["paging"] == {
            "current_page": 2,
            "items_per_page": 2,
            "total_items": 5,
            "total_pages": 3,
        }

    def test_list_products_by_category(self, product_repository):
        listing = product_repository.list_products(category="Apples")

        assert [product.name for product in listing["products"]] == ["P1", "P2"]
        assert listing["current_category"] == "Apples"

    def test_list_products_rejects_page_zero(self, product_repository):
        with pytest.raises(ValidationException):
            product_repository.list_products(page=0)

    def test_add_replaces_same_id(self, product_repository):
        product_repository.add(Product(product_id=1, name="New P1"))

        assert product_repository.get_by_id(1).name == "New P1"
        assert len(product_repository) == 3


class TestCatalogLoader:
    def test_loads_default_catalog(self):
        """El catálogo por defecto debe cargarse desde config/catalog.json."""
        products = load_catalog()

        assert len(products) == 9
        assert products[0].name == "Kayak"
        assert products[0].price == Decimal("275.00")

    def test_missing_file_returns_empty(self, tmp_path):
        assert load_catalog(tmp_path / "missing.json") == []

    def test_loads_custom_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text('[{"product_id": 1, "name": "Ball", "price": "19.50"}]', encoding="utf-8")

        products = load_catalog(path)

        assert products == [Product(product_id=1, name="Ball", price=Decimal("19.50"))]

    @pytest.mark.parametrize(
        "content",
        [
            '[{"product_id": 1, "name": "X", "price": "abc"}]',
            '["not an object"]',
            '{"product_id": 1}',
            "[{\"product_id\": 1}]",
            "not json",
        ],
    )
    def test_invalid_catalog_returns_empty(self, tmp_path, content):
        """Un catálogo inválido debe devolver una lista vacía en vez de fallar."""
        path = tmp_path / "catalog.json"
        path.write_text(content, encoding="utf-8")

        assert load_catalog(path) == []
