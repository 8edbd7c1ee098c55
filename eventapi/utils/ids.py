import uuid

from eventapi.core.exceptions import InvalidInputError


def ensure_uuid(value: str, field_name: str = "id") -> str:
    """UUID 형식의 ID인지 확인하고 정규화된 문자열을 반환합니다."""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError(
            f"Invalid {field_name} format", details={field_name: value}
        )
