"""Pick the best localized value of a field from a backend record.

Records may carry translations in three ways, checked in this order:
a nested ``translations`` map ({"title": {"en": ..., "es": ...}}),
flat per-locale columns (``title_es``), or the untranslated base field.
"""

from typing import Any

from storefront.config import get_default_locale


FALLBACK_LOCALE = "en"


def locale_key(locale: str | None) -> str:
    """Normalize a locale identifier to its 2-character lookup key.

    Examples:
        "en-US" -> "en"
        "PT" -> "pt"
        None -> default locale
    """
    if not locale:
        locale = get_default_locale()
    return locale[:2].lower()


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _from_translations(entity: dict, field: str, key: str) -> Any:
    translations = entity.get("translations")
    if not isinstance(translations, dict):
        return None
    field_translations = translations.get(field)
    if not isinstance(field_translations, dict):
        return None

    value = field_translations.get(key)
    if _present(value):
        return value
    return field_translations.get(FALLBACK_LOCALE)


def resolve_localized(entity: dict[str, Any] | None, field: str, locale: str | None) -> str:
    """
    Resolve a localized string for a record field.

    Args:
        entity: Backend record (any shape)
        field: Logical field name, e.g. "title" or "description"
        locale: Requested locale, e.g. "es" or "es-ES"

    Returns:
        The first non-empty value among translations[field][locale],
        translations[field]["en"], entity[f"{field}_{locale}"] and
        entity[field]; "" if none is set
    """
    if not isinstance(entity, dict):
        return ""

    key = locale_key(locale)

    for value in (
        _from_translations(entity, field, key),
        entity.get(f"{field}_{key}"),
        entity.get(field),
    ):
        if _present(value):
            return _as_text(value)

    return ""
