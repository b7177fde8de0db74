"""Shared machinery for calendar entities.

Entities keep their validated state in ``_data``. Each attribute has one
accessor method: called without an argument it returns the current value,
called with one it validates, stores and returns the entity so calls can be
chained::

    event.summary("Standup").location("Room 1")
    event.summary()  # -> "Standup"

``None`` is a real argument (it clears nullable attributes), so "no argument"
is told apart with the ``NOT_SET`` sentinel.
"""

import json
import logging
from typing import Any, ClassVar, Optional

from .exceptions import ICalSnapshotError, MissingParentError

logger = logging.getLogger(__name__)


class _NotSet:
    """Marker for an accessor called without a value."""

    _instance: ClassVar[Optional["_NotSet"]] = None

    def __new__(cls) -> "_NotSet":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


NOT_SET: Any = _NotSet()


def load_snapshot(data: Any, kind: str) -> dict[str, Any]:
    """Turn constructor input into a plain mapping.

    Accepts ``None``, a mapping, or the JSON string form of a mapping.

    Raises:
        ICalSnapshotError: If a string is not valid JSON or the input is not a mapping.
    """
    if data is None:
        return {}

    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ICalSnapshotError(f"`{kind}` snapshot is not valid JSON: {e}", field=kind) from e

    if not isinstance(data, dict):
        raise ICalSnapshotError(
            f"`{kind}` snapshot must be an object, got {type(data).__name__}", field=kind
        )

    return dict(data)


class ICalComponent:
    """Base class for Calendar, Event, Attendee, Alarm and Category.

    Subclasses list their accessor names in ``_attributes`` (the order in
    which a snapshot is applied and ``to_json`` keys are emitted) and, for
    child entities, name their parent in ``_parent_role``.
    """

    _kind: ClassVar[str] = "component"
    _attributes: ClassVar[tuple[str, ...]] = ()
    _actions: ClassVar[tuple[str, ...]] = ()
    _aliases: ClassVar[dict[str, str]] = {}
    _internal: ClassVar[tuple[str, ...]] = ()
    _parent_role: ClassVar[Optional[str]] = None

    def __init__(self, data: Any = None, parent: Any = None) -> None:
        if self._parent_role is not None and parent is None:
            raise MissingParentError(
                f"`{self._parent_role}` is required to create {self.__class__.__name__}",
                field=self._parent_role,
            )

        self._parent = parent
        self._data: dict[str, Any] = self._defaults()
        self._apply(self._coerce(data))

    def _defaults(self) -> dict[str, Any]:
        return {}

    def _coerce(self, data: Any) -> dict[str, Any]:
        """Hook for short forms; the default only understands snapshots."""
        return load_snapshot(data, self._kind)

    def _apply(self, data: dict[str, Any]) -> None:
        """Run every recognized snapshot key through its accessor."""
        normalized = {self._aliases.get(key, key): value for key, value in data.items()}

        for name in self._attributes:
            if name in normalized:
                getattr(self, name)(normalized[name])

        for name in self._actions:
            if normalized.get(name) is not None:
                getattr(self, name)(normalized[name])

        known = set(self._attributes) | set(self._actions) | set(self._internal)
        for key, value in normalized.items():
            if key not in known:
                logger.debug("Keeping unknown %s snapshot key %r", self._kind, key)
                self._data[key] = value

    def _extra_json(self) -> dict[str, Any]:
        """Unknown snapshot keys, re-emitted verbatim."""
        hidden = set(self._attributes) | set(self._internal)
        return {key: value for key, value in self._data.items() if key not in hidden}

    def to_json(self) -> dict[str, Any]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.to_json()!r}>"
