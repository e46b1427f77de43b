"""
Utilidad para cargar el catálogo de productos desde un archivo JSON.

El catálogo se lee una sola vez y se cachea en memoria para evitar
lecturas repetidas del disco.
"""

import json
import logging
from decimal import InvalidOperation
from functools import lru_cache
from pathlib import Path
from typing import List

from app.domain.models import Product

logger = logging.getLogger(__name__)

# Ruta base del proyecto
BASE_DIR = Path(__file__).resolve().parent.parent.parent
CATALOG_FILE_PATH = BASE_DIR / "config" / "catalog.json"


def load_catalog(path: Path | None = None) -> List[Product]:
    """
    Carga los productos del catálogo desde un archivo JSON.

    El formato esperado del JSON es una lista de objetos:
    [
        {"product_id": 1, "name": "Kayak", "category": "Watersports", "price": "275.00"},
        ...
    ]

    Args:
        path: Ruta del archivo; por defecto config/catalog.json

    Returns:
        Lista de productos. Vacía si el archivo no existe o es inválido.
    """
    catalog_path = path or CATALOG_FILE_PATH

    if not catalog_path.is_file():
        logger.warning(f"Archivo de catálogo no encontrado en: {catalog_path}")
        return []

    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            raw_products = json.load(f)

        products = [Product.from_dict(item) for item in raw_products]
        logger.info(f"Catálogo cargado exitosamente. {len(products)} productos.")
        return products

    except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError, InvalidOperation) as e:
        logger.error(f"Error cargando o procesando el archivo de catálogo: {e}")
        return []


@lru_cache(maxsize=1)
def get_default_catalog() -> tuple[Product, ...]:
    """Catálogo por defecto (cacheado)."""
    return tuple(load_catalog())
