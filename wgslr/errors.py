"""Exceptions raised while building a reflection model.

Every failure derives from ReflectionError so callers can treat malformed
shader source as an ordinary, recoverable condition.
"""

from __future__ import annotations


class ReflectionError(Exception):
    pass


class ShaderSyntaxError(ReflectionError):
    """The source text could not be parsed into a syntax tree."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


class QuerySyntaxError(ReflectionError):
    pass


class NodeTypeMismatch(ReflectionError):
    pass


class MissingRequiredChild(ReflectionError):
    pass


class UnsupportedLiteralType(ReflectionError):
    pass


class UnsupportedAddressSpace(ReflectionError):
    pass


class UnparsableTypeDeclaration(ReflectionError):
    pass


class MalformedBinding(ReflectionError):
    pass


class ParserInvariantViolation(ReflectionError):
    pass
