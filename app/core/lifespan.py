"""
Gestión del ciclo de vida de la aplicación FastAPI.

Este módulo maneja los eventos de startup y shutdown de la aplicación:
configuración de logging, carga del catálogo y creación de los servicios
que usan los endpoints (guardados en app.state).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.product_repository import InMemoryProductRepository
from app.services.cart.session_store import CartSessionStore
from app.services.orders import EmailOrderProcessor
from app.utils.catalog_loader import get_default_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.
    Maneja eventos de startup y shutdown de manera ordenada.

    Args:
        app: Instancia de FastAPI
    """
    # === STARTUP ===
    try:
        startup_configure_logging()
        logger.info("🚀 Iniciando Sports Store Cart...")

        startup_initialize_services(app)

        logger.info("🎉 Aplicación iniciada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el startup: {e}")
        raise

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info("🛑 Cerrando Sports Store Cart...")
    shutdown_cleanup_services(app)
    logger.info("👋 Aplicación cerrada correctamente")


# === FUNCIONES DE STARTUP ===


def startup_configure_logging() -> None:
    """Configura el sistema de logging."""
    setup_logging()


def startup_initialize_services(app: FastAPI) -> None:
    """
    Crea los servicios en memoria y los registra en app.state.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()
    catalog = get_default_catalog()
    if not catalog:
        logger.warning("⚠️ Catálogo vacío: no hay productos para vender")

    app.state.product_repository = InMemoryProductRepository(catalog)
    app.state.cart_sessions = CartSessionStore(idle_timeout_seconds=settings.SESSION_IDLE_TIMEOUT_SECONDS)
    app.state.order_processor = EmailOrderProcessor(settings)

    logger.info(f"✅ Servicios inicializados - {len(catalog)} productos en catálogo")


# === FUNCIONES DE SHUTDOWN ===


def shutdown_cleanup_services(app: FastAPI) -> None:
    """Descarta los carritos en memoria."""
    sessions = getattr(app.state, "cart_sessions", None)
    if sessions is not None:
        logger.info(f"🧹 Descartando {len(sessions)} carritos activos")
        sessions.clear()
