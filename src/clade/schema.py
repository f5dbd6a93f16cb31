"""Schema adapter -- uniform accessors over pydantic validation schemas.

The execution engine never touches pydantic internals directly. Instead it
talks to a :class:`Schema`, which exposes exactly the capabilities the
engine needs:

* :meth:`Schema.parse` -- validate and convert a raw value (raises
  :class:`pydantic.ValidationError` on failure).
* :meth:`Schema.get_shape` -- named sub-schemas, for object-like schemas.
* :meth:`Schema.get_description`, :meth:`Schema.get_details`,
  :meth:`Schema.get_deprecated`, :meth:`Schema.get_aliases` -- CLI metadata.

Two adapters cover the common cases:

* :class:`ModelSchema` wraps a :class:`pydantic.BaseModel` subclass and is
  used for options schemas.
* :class:`FieldSchema` wraps a type (optionally ``Annotated`` with a
  :func:`pydantic.Field`) through :class:`pydantic.TypeAdapter` and is used
  for positional and bequeathed-option schemas.

CLI metadata lives in ``json_schema_extra`` and is most easily declared
with :func:`option`::

    class GreetOptions(BaseModel):
        verbose: Optional[bool] = option(None, aliases=["v"])
        count: int = option(1, description="How many times", aliases="c")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

Deprecation = Union[bool, str, None]


class Schema(ABC):
    """Capability interface the engine uses to read and apply a schema."""

    @abstractmethod
    def parse(self, raw: Any) -> Any:
        """Validate *raw* and return the converted value.

        Raises:
            pydantic.ValidationError: If *raw* does not satisfy the schema.
        """
        ...

    def get_shape(self) -> Optional[dict[str, "Schema"]]:
        """Return the named sub-schemas, or ``None`` for non object-like schemas."""
        return None

    def get_description(self) -> Optional[str]:
        return None

    def get_details(self) -> Optional[str]:
        return None

    def get_deprecated(self) -> Deprecation:
        return None

    def get_aliases(self) -> Optional[list[str]]:
        return None


class FieldSchema(Schema):
    """Adapter over a single type plus its :class:`~pydantic.fields.FieldInfo`.

    Args:
        annotation: The Python type to validate against. May be an
            ``Annotated`` type carrying a :func:`pydantic.Field`.
        field_info: Explicit field metadata. When omitted it is derived
            from *annotation*.
    """

    def __init__(self, annotation: Any, field_info: Optional[FieldInfo] = None) -> None:
        if field_info is None:
            field_info = FieldInfo.from_annotation(annotation)
            annotation = field_info.annotation
        self._info = field_info
        self._annotation = Any if annotation is None else annotation
        if field_info.metadata:
            self._adapter: TypeAdapter[Any] = TypeAdapter(
                Annotated[(self._annotation, *field_info.metadata)]
            )
        else:
            self._adapter = TypeAdapter(self._annotation)

    @classmethod
    def of(cls, annotation: Any, default: Any = PydanticUndefined, **metadata: Any) -> "FieldSchema":
        """Build a schema from a type and :func:`option` keyword arguments.

        Unlike ``Annotated[...]``, this form accepts a *default*, which is
        returned by :meth:`parse` when the raw value is ``None``.
        """
        return cls(annotation, option(default, **metadata))

    @property
    def annotation(self) -> Any:
        return self._annotation

    @property
    def field_info(self) -> FieldInfo:
        return self._info

    def parse(self, raw: Any) -> Any:
        if raw is None and not self._info.is_required():
            return self._info.get_default(call_default_factory=True)
        return self._adapter.validate_python(raw)

    def get_description(self) -> Optional[str]:
        return self._info.description

    def get_details(self) -> Optional[str]:
        return _extra(self._info).get("details")

    def get_deprecated(self) -> Deprecation:
        native = getattr(self._info, "deprecated", None)
        if native is not None:
            # pydantic may store a ``warnings.deprecated`` instance here.
            return native if isinstance(native, (bool, str)) else getattr(native, "message", True)
        return _extra(self._info).get("deprecated")

    def get_aliases(self) -> Optional[list[str]]:
        extra = _extra(self._info)
        aliases = extra.get("aliases", extra.get("alias"))
        if aliases is None:
            return None
        if isinstance(aliases, str):
            return [aliases]
        return list(aliases)


class ModelSchema(Schema):
    """Adapter over a :class:`pydantic.BaseModel` subclass.

    :meth:`parse` returns a plain ``dict`` (``model_dump()``) so handlers
    always receive options as a mapping, with declared defaults filled in.
    """

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    def parse(self, raw: Any) -> dict[str, Any]:
        return self._model.model_validate(raw).model_dump()

    def get_shape(self) -> dict[str, Schema]:
        return {
            name: FieldSchema(info.annotation, info)
            for name, info in self._model.model_fields.items()
        }

    def get_description(self) -> Optional[str]:
        # Read __doc__ directly: inspect.getdoc would inherit BaseModel's docstring.
        doc = self._model.__doc__
        return doc.strip().splitlines()[0] if doc and doc.strip() else None


def option(
    default: Any = PydanticUndefined,
    *,
    description: Optional[str] = None,
    details: Optional[str] = None,
    aliases: Union[str, list[str], None] = None,
    deprecated: Deprecation = None,
    **kwargs: Any,
) -> Any:
    """Build a :func:`pydantic.Field` carrying CLI metadata.

    Args:
        default: Field default (omit for a required field).
        description: One-line help text.
        details: Longer help text.
        aliases: Short alias or list of aliases (without leading dash).
        deprecated: ``True`` or a message marking the field as deprecated.
        **kwargs: Passed through to :func:`pydantic.Field` (constraints,
            ``default_factory``...).
    """
    extra: dict[str, Any] = {}
    if aliases is not None:
        extra["aliases"] = [aliases] if isinstance(aliases, str) else list(aliases)
    if deprecated is not None:
        extra["deprecated"] = deprecated
    if details is not None:
        extra["details"] = details
    return Field(
        default,
        description=description,
        json_schema_extra=extra or None,
        **kwargs,
    )


def as_schema(obj: Any) -> Optional[Schema]:
    """Coerce a schema-like object into a :class:`Schema` adapter.

    Accepts ``None`` (returned as-is), a :class:`Schema`, a
    :class:`~pydantic.BaseModel` subclass, a bare
    :class:`~pydantic.fields.FieldInfo`, or any type understood by
    :class:`~pydantic.TypeAdapter`.
    """
    if obj is None or isinstance(obj, Schema):
        return obj
    if isinstance(obj, type) and issubclass(obj, BaseModel):
        return ModelSchema(obj)
    if isinstance(obj, FieldInfo):
        return FieldSchema(obj.annotation, obj)
    return FieldSchema(obj)


def get_alias_map(schema: Optional[Schema]) -> dict[str, list[str]]:
    """Return ``{option name: aliases}`` for every aliased field of *schema*."""
    shape = schema.get_shape() if schema is not None else None
    if not shape:
        return {}
    alias_map: dict[str, list[str]] = {}
    for name, sub_schema in shape.items():
        aliases = sub_schema.get_aliases()
        if aliases:
            alias_map[name] = aliases
    return alias_map


def _extra(info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    return extra if isinstance(extra, dict) else {}
