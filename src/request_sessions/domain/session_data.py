"""SessionData — payload persistido entre requests.

Mapa de chaves string para valores arbitrários (serializáveis em JSON),
com quatro campos reservados mantidos pelo orquestrador:
- _flash: valores de leitura única
- _accessed: ISO-8601 do último load/create bem-sucedido
- _expire: ISO-8601 ou None (nunca expira)
- _delete: marca a sessão para remoção no fim do request
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

SessionData = dict[str, Any]

FLASH_KEY = "_flash"
ACCESSED_KEY = "_accessed"
EXPIRE_KEY = "_expire"
DELETE_KEY = "_delete"
RESERVED_KEYS: frozenset[str] = frozenset({FLASH_KEY, ACCESSED_KEY, EXPIRE_KEY, DELETE_KEY})


class SessionDataError(ValueError):
    """Payload de sessão malformado (tratado como "sem sessão" pelos stores)."""

    pass


class SessionFields(BaseModel):
    """Validação dos campos reservados de um payload decodificado.

    Chaves de usuário são ignoradas aqui e preservadas intactas por
    validate_session_data.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    flash: dict[str, Any] = Field(default_factory=dict, alias=FLASH_KEY)
    accessed: StrictStr | None = Field(default=None, alias=ACCESSED_KEY)
    expire: StrictStr | None = Field(default=None, alias=EXPIRE_KEY)
    delete: StrictBool = Field(default=False, alias=DELETE_KEY)


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Converte ISO-8601 em datetime aware (naive é tratado como UTC).

    Raises:
        ValueError: Se o valor não for um ISO-8601 válido
    """
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def expiry_from(now: datetime, expire_after_seconds: int | None) -> str | None:
    """Calcula o _expire a partir de agora (None = nunca expira)."""
    if not expire_after_seconds:
        return None
    return format_timestamp(now + timedelta(seconds=expire_after_seconds))


def is_session_valid(data: SessionData, now: datetime) -> bool:
    """Sessão é válida se _expire é None ou está estritamente no futuro.

    _expire ilegível invalida a sessão.
    """
    raw_expire = data.get(EXPIRE_KEY)
    if raw_expire is None:
        return True
    try:
        expire_at = parse_timestamp(raw_expire)
    except (TypeError, ValueError):
        return False
    return now < expire_at


def new_session_data(now: datetime, expire_after_seconds: int | None) -> SessionData:
    """Constrói dados padrão de uma sessão nova.

    Sempre retorna um dict novo (inclusive _flash); nunca reutilizar
    instâncias entre sessões.
    """
    return {
        FLASH_KEY: {},
        ACCESSED_KEY: format_timestamp(now),
        EXPIRE_KEY: expiry_from(now, expire_after_seconds),
        DELETE_KEY: False,
    }


def validate_session_data(raw: Any) -> SessionData:
    """Valida um payload decodificado e completa campos reservados ausentes.

    Raises:
        SessionDataError: Se o payload não for um mapa ou tiver campos
            reservados com tipos inválidos
    """
    if not isinstance(raw, dict):
        raise SessionDataError(f"Session payload must be an object, got {type(raw).__name__}")

    try:
        fields = SessionFields.model_validate(raw)
    except ValidationError as e:
        raise SessionDataError(f"Invalid reserved session fields: {e.error_count()} error(s)") from e

    data: SessionData = dict(raw)
    data[FLASH_KEY] = fields.flash
    data[ACCESSED_KEY] = fields.accessed
    data[EXPIRE_KEY] = fields.expire
    data[DELETE_KEY] = fields.delete
    return data
