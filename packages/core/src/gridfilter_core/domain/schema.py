"""
Record schemas — the name → typed accessor map of a filterable record type.

A :class:`RecordSchema` is computed once (either derived from type hints or
registered explicitly through :class:`RecordSchemaBuilder`) and is read-only
afterwards, so a single instance can be shared by concurrent queries.

Usage::

    @dataclass
    class LogEntry:
        Id: int
        Message: str
        TimeStamp: datetime | None = None

    schema = RecordSchema.from_type(LogEntry)
    schema.get("TimeStamp").field_type   # datetime
    schema.get("TimeStamp").nullable     # True

    schema = (
        RecordSchema.builder()
        .register_field("Id", int, operator.itemgetter("Id"))
        .register_field("Message", str, operator.itemgetter("Message"))
        .build()
    )
"""

from __future__ import annotations

import inspect
import operator
import types
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    ClassVar,
    Generic,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

T = TypeVar("T")

# Sort keys tried, in order, when no explicit default is configured.
_DEFAULT_SORT_CANDIDATES = ("Id", "id")


def unwrap_annotation(annotation: Any) -> tuple[type[Any], bool]:
    """
    Reduce a type annotation to a concrete class and a nullability flag.

    ``int | None`` → ``(int, True)``, ``Annotated[str, ...]`` → ``(str, False)``.
    Annotations that do not name a single class (``Any``, TypeVars,
    multi-member unions) become ``object``.
    """
    nullable = False
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = get_args(annotation)
            concrete = [m for m in members if m is not type(None)]
            nullable = nullable or len(concrete) != len(members)
            if len(concrete) == 1:
                annotation = concrete[0]
                continue
            return object, nullable
        break

    if annotation is type(None):
        return object, True
    if isinstance(annotation, type):
        return annotation, nullable
    origin = get_origin(annotation)
    if isinstance(origin, type):
        return origin, nullable
    return object, nullable


@dataclass(frozen=True)
class FieldDescriptor:
    """A single filterable/sortable field of a record type."""

    name: str
    field_type: type[Any]
    getter: Callable[[Any], Any]
    nullable: bool = False

    def get(self, record: Any) -> Any:
        """Extract this field's value from *record*."""
        return self.getter(record)

    @property
    def is_string(self) -> bool:
        """True for plain text fields (string enums excluded)."""
        return issubclass(self.field_type, str) and not issubclass(
            self.field_type, Enum
        )


class RecordSchema(Generic[T]):
    """Immutable set of :class:`FieldDescriptor` keyed by field name."""

    def __init__(
        self,
        fields: Iterable[FieldDescriptor],
        *,
        record_type: type[T] | None = None,
        default_sort_field: str | None = None,
    ) -> None:
        collected: dict[str, FieldDescriptor] = {}
        for descriptor in fields:
            if descriptor.name in collected:
                raise ValueError(f"Field '{descriptor.name}' is registered twice")
            collected[descriptor.name] = descriptor

        if default_sort_field is not None and default_sort_field not in collected:
            raise ValueError(
                f"Default sort field '{default_sort_field}' is not a registered field"
            )

        self._fields: Mapping[str, FieldDescriptor] = MappingProxyType(collected)
        self.record_type = record_type
        self.default_sort_field = default_sort_field or next(
            (name for name in _DEFAULT_SORT_CANDIDATES if name in collected), None
        )

    # -- look-up -------------------------------------------------------------

    @property
    def name(self) -> str:
        """Display name of the record type (used in error messages)."""
        return self.record_type.__name__ if self.record_type is not None else "record"

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        return self._fields

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def get(self, name: str) -> FieldDescriptor | None:
        """Return the descriptor for *name* (case-sensitive) or ``None``."""
        return self._fields.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"RecordSchema({self.name}, fields={self.field_names!r})"

    # -- construction --------------------------------------------------------

    @staticmethod
    def builder(record_type: type[T] | None = None) -> RecordSchemaBuilder[T]:
        """Start an explicit field registration."""
        return RecordSchemaBuilder(record_type)

    @classmethod
    def from_type(
        cls,
        record_type: type[T],
        *,
        default_sort_field: str | None = None,
    ) -> RecordSchema[T]:
        """
        Derive a schema from the public annotated attributes of *record_type*.

        Works for dataclasses, pydantic models and plain annotated classes.
        Read-only ``@property`` getters with a return annotation are included
        as well. ``ClassVar`` and ``_private`` names are skipped.
        """
        fields: list[FieldDescriptor] = []
        for name, annotation in _public_annotations(record_type).items():
            field_type, nullable = unwrap_annotation(annotation)
            fields.append(
                FieldDescriptor(
                    name=name,
                    field_type=field_type,
                    getter=operator.attrgetter(name),
                    nullable=nullable,
                )
            )

        known = {f.name for f in fields}
        for name, annotation in _property_annotations(record_type).items():
            if name in known:
                continue
            field_type, nullable = unwrap_annotation(annotation)
            fields.append(
                FieldDescriptor(
                    name=name,
                    field_type=field_type,
                    getter=operator.attrgetter(name),
                    nullable=nullable,
                )
            )

        return cls(
            fields,
            record_type=record_type,
            default_sort_field=default_sort_field,
        )


class RecordSchemaBuilder(Generic[T]):
    """Fluent registration of fields for records without usable annotations."""

    def __init__(self, record_type: type[T] | None = None) -> None:
        self._record_type = record_type
        self._fields: list[FieldDescriptor] = []
        self._default_sort_field: str | None = None

    def register_field(
        self,
        name: str,
        field_type: Any = str,
        getter: Callable[[Any], Any] | None = None,
        *,
        nullable: bool = False,
    ) -> RecordSchemaBuilder[T]:
        """
        Register a field.

        Args:
            name: Field name used by filters and sorting (case-sensitive).
            field_type: Native type values are parsed into. ``X | None``
                marks the field nullable.
            getter: Value extractor; defaults to ``attrgetter(name)``.
            nullable: Force the nullable flag.
        """
        resolved, optional = unwrap_annotation(field_type)
        self._fields.append(
            FieldDescriptor(
                name=name,
                field_type=resolved,
                getter=getter or operator.attrgetter(name),
                nullable=nullable or optional,
            )
        )
        return self

    def default_sort(self, name: str) -> RecordSchemaBuilder[T]:
        """Set the field used when a requested sort field does not exist."""
        self._default_sort_field = name
        return self

    def build(self) -> RecordSchema[T]:
        return RecordSchema(
            self._fields,
            record_type=self._record_type,
            default_sort_field=self._default_sort_field,
        )


# ---------------------------------------------------------------------------
# Annotation discovery
# ---------------------------------------------------------------------------


def _public_annotations(record_type: type[Any]) -> dict[str, Any]:
    # pydantic v2 exposes resolved annotations per field
    model_fields = getattr(record_type, "model_fields", None)
    if isinstance(model_fields, dict):
        return {
            name: info.annotation
            for name, info in model_fields.items()
            if not name.startswith("_")
        }

    try:
        hints = get_type_hints(record_type)
    except (NameError, TypeError):
        hints = {}
        for klass in reversed(record_type.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))

    return {
        name: annotation
        for name, annotation in hints.items()
        if not name.startswith("_")
        and get_origin(annotation) is not ClassVar
        and annotation is not ClassVar
    }


def _property_annotations(record_type: type[Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for klass in record_type.__mro__:
        if klass is object or klass.__module__.startswith("pydantic"):
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or name in result:
                continue
            if not isinstance(member, property) or member.fget is None:
                continue
            try:
                annotation = get_type_hints(member.fget).get("return")
            except (NameError, TypeError):
                annotation = inspect.signature(member.fget).return_annotation
            if annotation is None or annotation is inspect.Signature.empty:
                continue
            result[name] = annotation
    return result
