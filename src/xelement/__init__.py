"""
Typed, XML-like element model: element types declare attribute schemas,
instances are validated at construction, and attributes are read and written
through a type-checking accessor.
"""

from .version import __version__, SCHEMA_FORMAT_VERSION  # noqa: F401
from .builder import build_element
from .element import Element, ElementType
from .errors import (
    AttributeAccessError,
    MissingAttributeError,
    SchemaError,
    TypeMismatchError,
    UnknownAttributeError,
    UnknownBehaviorError,
    UnknownElementError,
    XElementError,
)
from .registry import ElementRegistry
from .schema import AttributeSchema, ElementSchema

__all__ = [
    "AttributeAccessError",
    "AttributeSchema",
    "Element",
    "ElementRegistry",
    "ElementSchema",
    "ElementType",
    "MissingAttributeError",
    "SchemaError",
    "TypeMismatchError",
    "UnknownAttributeError",
    "UnknownBehaviorError",
    "UnknownElementError",
    "XElementError",
    "build_element",
    "__version__",
    "SCHEMA_FORMAT_VERSION",
]
