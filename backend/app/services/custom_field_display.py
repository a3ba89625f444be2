"""
Read-only rendering of custom field values according to their declared type
"""
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from app.core.config import settings
from app.models.custom_field import CustomFieldType

PLACEHOLDER = "—"

SELECT_OPTIONS = {
    "en": {"option1": "Option 1", "option2": "Option 2", "option3": "Option 3"},
    "ru": {"option1": "Опция 1", "option2": "Опция 2", "option3": "Опция 3"},
}

BOOLEAN_LABELS = {
    "en": ("Yes", "No"),
    "ru": ("Да", "Нет"),
}

DATE_FORMATS = {
    "en": "{d.month}/{d.day}/{d.year}",
    "ru": "{d.day:02d}.{d.month:02d}.{d.year}",
}

def resolve_locale(locale: Optional[str]) -> str:
    for candidate in (locale, settings.DEFAULT_LOCALE):
        if candidate:
            short = candidate.lower().replace("_", "-").split("-")[0]
            if short in DATE_FORMATS:
                return short
    return "en"

def parse_date_value(value: Any) -> Optional[date]:
    """Best-effort conversion of a stored value to a date, None when unparseable"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None

def _plain(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def render_custom_field_value(value: Any, field_type: CustomFieldType, locale: Optional[str] = None) -> str:
    """
    Render a stored custom field value for display

    Args:
        value: Raw value from an entity's custom_fields bag
        field_type: Declared type of the field definition
        locale: Language code for labels and date format

    Returns:
        Display string; PLACEHOLDER for missing or unparseable dates. Never raises.
    """
    if value is None:
        return PLACEHOLDER

    lang = resolve_locale(locale)
    try:
        field_type = CustomFieldType(field_type)
    except ValueError:
        return _plain(value)

    if field_type == CustomFieldType.DATE:
        parsed = parse_date_value(value)
        if parsed is None:
            return PLACEHOLDER
        return DATE_FORMATS[lang].format(d=parsed)

    if field_type == CustomFieldType.SELECT:
        return SELECT_OPTIONS[lang].get(value, _plain(value)) if isinstance(value, str) else _plain(value)

    if field_type == CustomFieldType.BOOLEAN:
        yes, no = BOOLEAN_LABELS[lang]
        return yes if value else no

    return _plain(value)

def render_custom_fields(definitions: Iterable, custom_fields: Optional[Dict[str, Any]], locale: Optional[str] = None) -> List[Dict[str, Any]]:
    """Render an entity's bag against its definitions; keys without a definition are ignored"""
    bag = custom_fields or {}
    rendered = []
    for definition in definitions:
        value = bag.get(definition.field_id)
        rendered.append({
            "field_id": definition.field_id,
            "header": definition.header,
            "type": definition.type,
            "value": value,
            "display": render_custom_field_value(value, definition.type, locale)
        })
    return rendered
