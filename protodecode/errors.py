"""
Errors raised while parsing schemas and decoding wire data.

Every failure is fatal to the call that raised it; nothing is retried or
recovered from inside the package.
"""


class ProtoDecodeError(ValueError):
    """Base class for everything this package raises."""


# =============================================================================
# SCHEMA ERRORS
# =============================================================================

class LexicalError(ProtoDecodeError):
    """Schema text that cannot be classified as any token."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f'Could not ascertain token type from contents of: "{text}"')


class SchemaSyntaxError(ProtoDecodeError):
    """Unexpected token at a grammar position, including premature end-of-input."""


class UnsupportedConstructError(ProtoDecodeError):
    """A schema feature that is recognised but not implemented."""

    def __init__(self, construct: str):
        self.construct = construct
        super().__init__(f"unsupported construct: {construct}")


# =============================================================================
# WIRE ERRORS
# =============================================================================

class UnknownWireTypeError(ProtoDecodeError):
    def __init__(self, wire_type: int):
        self.wire_type = wire_type
        super().__init__(f'Unknown wire type = "{wire_type}" (decimal)')


class TruncatedDataError(ProtoDecodeError):
    """The buffer ended in the middle of a varint or value."""


# =============================================================================
# ASSEMBLY ERRORS
# =============================================================================

class MissingMessageError(ProtoDecodeError):
    def __init__(self, message_name: str):
        self.message_name = message_name
        super().__init__(f'Could not find message: "{message_name}" in the provided schema')


class UnknownFieldTypeError(ProtoDecodeError):
    def __init__(self, field_type: str):
        self.field_type = field_type
        super().__init__(f"unknown proto type: {field_type}")
