"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (ou arquivo .env).
Nunca hardcode a chave de criptografia de sessão.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_COOKIE_NAME: str = "session"
DEFAULT_SESSION_DATA_COOKIE_NAME: str = "session_data"

VALID_SESSION_BACKENDS: frozenset[str] = frozenset({"memory", "redis", "firestore", "cookie"})
VALID_SAMESITE: frozenset[str] = frozenset({"lax", "strict", "none"})
MIN_PRODUCTION_KEY_LENGTH: int = 32


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    # Aplicação
    service_name: str = "request_sessions"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text
    correlation_id_header: str = "x-correlation-id"

    # Sessão
    session_store_backend: str = "memory"  # memory | redis | firestore | cookie
    session_expire_after_seconds: int | None = None  # None = nunca expira

    # Cookie de transporte
    session_cookie_name: str = DEFAULT_SESSION_COOKIE_NAME
    session_data_cookie_name: str = DEFAULT_SESSION_DATA_COOKIE_NAME  # apenas backend=cookie
    session_cookie_path: str = "/"
    session_cookie_domain: str | None = None
    session_cookie_secure: bool = False
    session_cookie_httponly: bool = True
    session_cookie_samesite: str = "lax"
    session_cookie_max_age: int | None = None  # None = cookie de sessão do navegador

    # Backend cookie (payload criptografado no cliente)
    session_encryption_key: str | None = None

    # Backend redis
    redis_url: str | None = None
    session_redis_prefix: str = "session:"

    # Backend firestore
    firestore_project_id: str | None = None
    session_firestore_collection: str = "sessions"

    def validate_session_store_config(self) -> list[str]:
        """Valida backend de session store por ambiente.

        Em staging/prod, memory é proibido (processos múltiplos não
        compartilham o mapa). Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        backend = self.session_store_backend.lower()

        if backend not in VALID_SESSION_BACKENDS:
            errors.append(
                f"SESSION_STORE_BACKEND '{backend}' inválido. "
                f"Valores válidos: {sorted(VALID_SESSION_BACKENDS)}"
            )

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append(
                "SESSION_STORE_BACKEND=memory é proibido em staging/production. "
                "Use 'redis', 'firestore' ou 'cookie'."
            )

        if backend == "redis" and not self.redis_url:
            errors.append("SESSION_STORE_BACKEND=redis requer REDIS_URL configurado")

        if backend == "firestore" and not self.firestore_project_id:
            errors.append("SESSION_STORE_BACKEND=firestore requer FIRESTORE_PROJECT_ID")

        if backend == "cookie":
            if not self.session_encryption_key:
                errors.append("SESSION_STORE_BACKEND=cookie requer SESSION_ENCRYPTION_KEY")
            elif (self.is_staging or self.is_production) and len(
                self.session_encryption_key
            ) < MIN_PRODUCTION_KEY_LENGTH:
                errors.append(
                    f"SESSION_ENCRYPTION_KEY deve ter ao menos {MIN_PRODUCTION_KEY_LENGTH} "
                    "caracteres em staging/production"
                )

        if self.session_expire_after_seconds is not None and self.session_expire_after_seconds <= 0:
            errors.append("SESSION_EXPIRE_AFTER_SECONDS deve ser > 0 (ou vazio para nunca expirar)")

        return errors

    def validate_cookie_config(self) -> list[str]:
        """Valida opções de transporte do cookie."""
        errors: list[str] = []
        samesite = self.session_cookie_samesite.lower()

        if samesite not in VALID_SAMESITE:
            errors.append(
                f"SESSION_COOKIE_SAMESITE '{samesite}' inválido. "
                f"Valores válidos: {sorted(VALID_SAMESITE)}"
            )
        if samesite == "none" and not self.session_cookie_secure:
            errors.append("SESSION_COOKIE_SAMESITE=none requer SESSION_COOKIE_SECURE=true")
        if not self.session_cookie_name:
            errors.append("SESSION_COOKIE_NAME não pode ser vazio")
        if self.session_cookie_name == self.session_data_cookie_name:
            errors.append("SESSION_COOKIE_NAME e SESSION_DATA_COOKIE_NAME devem ser distintos")
        if self.is_production and not self.session_cookie_secure:
            errors.append("SESSION_COOKIE_SECURE deve ser true em production")
        return errors

    def cookie_set_options(self) -> dict[str, Any]:
        """Opções para set/delete do cookie (formato de Response.set_cookie)."""
        options: dict[str, Any] = {
            "path": self.session_cookie_path,
            "secure": self.session_cookie_secure,
            "httponly": self.session_cookie_httponly,
            "samesite": self.session_cookie_samesite.lower(),
        }
        if self.session_cookie_domain:
            options["domain"] = self.session_cookie_domain
        if self.session_cookie_max_age is not None:
            options["max_age"] = self.session_cookie_max_age
        return options

    def cookie_get_options(self) -> dict[str, Any]:
        """Opções de leitura (nenhuma por padrão; repassadas ao accessor)."""
        return {}

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
