"""Typed exception hierarchy for block conversion errors.

This module defines all custom exceptions used by the block converter.
All exceptions inherit from BlockConverterError base class for easy catching
and include descriptive messages with context to help with debugging.
"""

from typing import Any, Optional


class BlockConverterError(Exception):
    """Base exception for all block converter errors.

    Use this to catch any application-level error from the converter.
    """
    pass


class MalformedBlockError(BlockConverterError):
    """Raised when a block does not have the expected shape.

    Inside a conversion this is non-fatal: the block renders as an empty
    placeholder and a diagnostic is recorded.
    """

    def __init__(self, block_name: str, reason: str):
        super().__init__(f"Malformed block '{block_name or '<freeform>'}': {reason}")
        self.block_name = block_name
        self.reason = reason


class AttributeTypeError(MalformedBlockError):
    """Raised when a block attribute has a different type than requested."""

    def __init__(self, key: str, expected: str, actual: Any, block_name: str = ""):
        actual_type = type(actual).__name__
        super().__init__(
            block_name,
            f"attribute '{key}' expected {expected}, got {actual_type}"
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class HandlerError(BlockConverterError):
    """Raised (and recorded) when a block handler fails."""

    def __init__(self, block_name: str, cause: Exception):
        super().__init__(
            f"Handler for '{block_name}' failed: {type(cause).__name__}: {cause}"
        )
        self.block_name = block_name
        self.cause = cause


class InvalidOptionsError(BlockConverterError):
    """Raised when conversion options are invalid. Fatal for the whole call."""

    def __init__(self, message: str, option: Optional[str] = None):
        if option:
            full_message = f"Invalid option '{option}': {message}"
        else:
            full_message = f"Invalid options: {message}"
        super().__init__(full_message)
        self.option = option
        self.original_message = message


class InvalidInputError(BlockConverterError):
    """Raised when the top-level input is neither a block nor a block list."""

    def __init__(self, actual: Any):
        super().__init__(
            f"Expected a block, a block list or a sequence of blocks, "
            f"got {type(actual).__name__}"
        )
        self.actual = actual


class ConfigError(BlockConverterError):
    """Raised when an options file fails validation."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(BlockConverterError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class StreamConsumedError(BlockConverterError):
    """Raised when a finished or cancelled chunk stream is iterated again."""

    def __init__(self, state: str):
        super().__init__(
            f"Chunk stream is {state} and cannot be restarted; "
            f"request a fresh conversion"
        )
        self.state = state
