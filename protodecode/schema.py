"""
Schema AST produced by the parser.

Three node shapes, no shared base class. Consumers check them with
isinstance() and fail on anything else.
"""

from dataclasses import dataclass
from typing import Tuple, Union

# =============================================================================
# FIELD TYPES
# =============================================================================

FIELD_TYPE_INT32 = "int32"
FIELD_TYPE_BOOL = "bool"
FIELD_TYPE_STRING = "string"

FIELD_TYPES = (FIELD_TYPE_INT32, FIELD_TYPE_BOOL, FIELD_TYPE_STRING)


# =============================================================================
# NODES
# =============================================================================

@dataclass(frozen=True)
class Syntax:
    version: str = "proto3"


@dataclass(frozen=True)
class Field:
    field_type: str
    name: str
    number: int


@dataclass(frozen=True)
class Message:
    name: str
    body: Tuple[Union["Message", Field], ...] = ()


SchemaNode = Union[Syntax, Message, Field]
