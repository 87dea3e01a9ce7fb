from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from pypager.utils.settings import SettingsResolver


@runtime_checkable
class EndpointDescriptor(Protocol):
    """Minimal capability a cursor page needs to request adjacent pages."""

    def endpoint_url(self) -> str: ...


class Endpoint:
    """Base endpoint descriptor.

    Subclasses name their request path through an inner Settings class,
    or get one derived from the class name:

        class RecentlyPlayed(Endpoint):
            class Settings:
                path = "/me/player/recently-played"
    """

    _path: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._path = SettingsResolver.get_path(cls)

    def endpoint_url(self) -> str:
        return self._path

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self._path!r})"
