"""Locales bundled with the package, by name."""
from valence.reporting.locale import ru

BUILTIN_LOCALES: dict[str, dict] = {
    "ru": ru.TRANSLATIONS,
}
