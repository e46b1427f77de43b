"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Sports Store Cart"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    ALLOWED_HOSTS: Optional[List[str]] = Field(default=None)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_JSON: bool = Field(default=False)

    # === CONFIGURACIÓN DE LA TIENDA ===
    CURRENCY: str = Field(default="USD")
    PRODUCTS_PAGE_SIZE: int = Field(default=4)
    SESSION_COOKIE_NAME: str = Field(default="sportsstore_session")
    SESSION_IDLE_TIMEOUT_SECONDS: int = Field(default=3600)

    # === CONFIGURACIÓN DE EMAIL DE PEDIDOS ===
    ORDER_EMAIL_TO: str = Field(default="orders@example.com")
    ORDER_EMAIL_FROM: str = Field(default="sportsstore@example.com")
    SMTP_HOST: str = Field(default="smtp.example.com")
    SMTP_PORT: int = Field(default=587)
    SMTP_USERNAME: Optional[str] = Field(default=None)
    SMTP_PASSWORD: Optional[str] = Field(default=None)
    SMTP_USE_SSL: bool = Field(default=False)
    SMTP_TIMEOUT: int = Field(default=10)
    # En desarrollo los pedidos se escriben como archivos .eml en vez de enviarse
    ORDER_EMAIL_WRITE_AS_FILE: bool = Field(default=True)
    ORDER_EMAIL_FILE_LOCATION: str = Field(default="orders_outbox")

    # === CONFIGURACIÓN DE DOCUMENTACIÓN ===
    ENABLE_DOCS: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v):
        """Parsea ALLOWED_HOSTS como lista separada por comas."""
        if isinstance(v, str):
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        """Valida que la moneda sea un código ISO de 3 letras."""
        if len(v) != 3 or not v.isalpha():
            raise ValueError("CURRENCY debe ser un código ISO 4217 de 3 letras")
        return v.upper()

    @field_validator("PRODUCTS_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Valida que el tamaño de página sea positivo."""
        if v < 1:
            raise ValueError("PRODUCTS_PAGE_SIZE debe ser mayor que 0")
        return v

    @field_validator("SESSION_IDLE_TIMEOUT_SECONDS")
    @classmethod
    def validate_session_timeout(cls, v):
        """Valida que la expiración de sesión sea positiva."""
        if v < 1:
            raise ValueError("SESSION_IDLE_TIMEOUT_SECONDS debe ser mayor que 0")
        return v

    @field_validator("PORT", "SMTP_PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("El puerto debe estar entre 1 y 65535")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def get_environment_info() -> dict:
    """
    Obtiene información del entorno actual.

    Returns:
        dict: Información del entorno
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "currency": settings.CURRENCY,
        "order_email_mode": "file" if settings.ORDER_EMAIL_WRITE_AS_FILE else "smtp",
    }
