"""Settings resolution utilities for Endpoint configuration."""

from __future__ import annotations

import re


def _kebab(name: str) -> str:
    """Kebab-case a class name for derived endpoint paths.

    Args:
        name: CamelCase class name

    Returns:
        Lower-case, hyphen-separated name
    """
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "-", name)
    return words.lower()


class SettingsResolver:
    """Resolves endpoint settings from inner Settings class."""

    @staticmethod
    def get_path(cls: type) -> str:
        """Get endpoint path from Settings or derive it from the class name.

        Args:
            cls: Endpoint class

        Returns:
            Request path starting with a slash
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "path"):
            path = settings.path
        else:
            path = _kebab(cls.__name__)
        return "/" + path.lstrip("/")
