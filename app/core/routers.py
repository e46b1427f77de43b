"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo se encarga de registrar todos los routers de la API,
configurar endpoints base y organizar las rutas de manera estructurada.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request

from app.api.v1.endpoints.cart import router as cart_router
from app.api.v1.endpoints.products import router as products_router
from app.core.config import get_environment_info, get_settings

logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    settings = get_settings()

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.

        Returns:
            Dict con información de la API
        """
        return {
            "message": "Sports Store Cart API",
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs" if (settings.DEBUG or settings.ENABLE_DOCS) else "disabled",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "products": "/api/v1/products",
                "cart": "/api/v1/cart",
                "checkout": "/api/v1/cart/checkout",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        """
        Endpoint simple para verificar que la API responde.

        Returns:
            Dict con pong y timestamp
        """
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints de health check.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check(request: Request):
        """
        Health check: catálogo cargado y sesiones activas.

        Returns:
            Dict con estado de los servicios en memoria
        """
        state = request.app.state
        catalog_size = len(state.product_repository)

        return {
            "status": "healthy" if catalog_size else "degraded",
            "catalog_products": catalog_size,
            "active_carts": len(state.cart_sessions),
            "environment": get_environment_info(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la API v1.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers de API v1...")

    app.include_router(
        products_router,
        prefix="/api/v1",
        responses={
            404: {"description": "Product not found"},
            500: {"description": "Internal server error"},
        },
    )
    logger.info("✅ Router de productos configurado")

    app.include_router(
        cart_router,
        prefix="/api/v1",
        responses={
            422: {"description": "Invalid cart operation"},
            500: {"description": "Internal server error"},
        },
    )
    logger.info("✅ Router de carrito configurado")


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando todos los routers...")

    create_root_endpoints(app)
    create_health_endpoints(app)
    configure_api_v1_routers(app)

    logger.info("✅ Todos los routers configurados correctamente")
