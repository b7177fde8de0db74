"""Event category."""

from typing import TYPE_CHECKING, Any

from .base import NOT_SET, ICalComponent, load_snapshot
from .escaping import escape
from .exceptions import ICalRenderError
from .validators import validate_text

if TYPE_CHECKING:
    from .event import Event


class Category(ICalComponent):
    """A single entry of an event's CATEGORIES property.

    Created from a snapshot, a JSON string or simply the category name.
    """

    _kind = "category"
    _attributes = ("name",)
    _parent_role = "event"

    def __init__(self, data: Any = None, event: "Event" = None) -> None:
        super().__init__(data, event)

    def _defaults(self) -> dict[str, Any]:
        return {"name": None}

    def _coerce(self, data: Any) -> dict[str, Any]:
        if isinstance(data, str) and not data.lstrip().startswith("{"):
            return {"name": data}
        return load_snapshot(data, self._kind)

    def name(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["name"]
        self._data["name"] = validate_text(value)
        return self

    def render(self) -> str:
        """Escaped category name, ready to be joined into CATEGORIES."""
        if not self._data["name"]:
            raise ICalRenderError("No value for `name` in Category given!", field="category.name")
        return escape(self._data["name"])

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self._data["name"]}
        data.update(self._extra_json())
        return data
