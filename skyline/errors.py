"""
Errors - Typed exceptions shared by every skyline component
"""
from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Broad category of a failure, used in messages and exit handling"""
    VALIDATION = "VALIDATION"
    IO = "IO"
    NETWORK = "NETWORK"
    GRAPHQL = "GRAPHQL"
    STL = "STL"


class SkylineError(Exception):
    """
    Base class for all skyline failures.

    Carries the error category, a human readable message and the
    underlying exception (if any).
    """
    error_type: ErrorType = ErrorType.VALIDATION

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause is not None:
            return f"[{self.error_type.value}] {self.message}: {self.cause}"
        return f"[{self.error_type.value}] {self.message}"


class ValidationError(SkylineError):
    """Invalid input: empty grid, malformed year range, bad counts"""
    error_type = ErrorType.VALIDATION


class SkylineIOError(SkylineError):
    """Font, image or output file could not be read or written"""
    error_type = ErrorType.IO


class GeometryError(SkylineError):
    """Invalid geometry such as a cube with a non-positive extent"""
    error_type = ErrorType.STL


class NetworkError(SkylineError):
    error_type = ErrorType.NETWORK


class GraphQLError(SkylineError):
    error_type = ErrorType.GRAPHQL
