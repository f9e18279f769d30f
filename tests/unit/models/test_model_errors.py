"""Unit tests for models.errors module."""

import pytest

from src.models.errors import (
    AttributeTypeError,
    BlockConverterError,
    ConfigError,
    FilesystemError,
    HandlerError,
    InvalidInputError,
    InvalidOptionsError,
    MalformedBlockError,
    StreamConsumedError,
)


class TestBlockConverterError:
    """Test cases for the base exception."""

    @pytest.mark.parametrize("error_class", [
        MalformedBlockError, AttributeTypeError, HandlerError, InvalidOptionsError,
        InvalidInputError, ConfigError, FilesystemError, StreamConsumedError,
    ])
    def test_all_errors_inherit_from_base(self, error_class):
        """Every converter error should inherit from BlockConverterError."""
        assert issubclass(error_class, BlockConverterError)

    def test_message_is_preserved(self):
        with pytest.raises(BlockConverterError) as exc_info:
            raise BlockConverterError("custom message")
        assert str(exc_info.value) == "custom message"


class TestMalformedBlockError:
    """Test cases for MalformedBlockError."""

    def test_message_format(self):
        error = MalformedBlockError("core/group", "bad template")
        assert str(error) == "Malformed block 'core/group': bad template"
        assert error.block_name == "core/group"
        assert error.reason == "bad template"

    def test_freeform_name_in_message(self):
        """A nameless block should be shown as <freeform>."""
        assert "<freeform>" in str(MalformedBlockError("", "bad"))


class TestHandlerError:
    """Test cases for HandlerError."""

    def test_wraps_cause(self):
        cause = ValueError("boom")
        error = HandlerError("core/image", cause)

        assert error.cause is cause
        assert error.block_name == "core/image"
        assert "ValueError: boom" in str(error)


class TestInvalidOptionsError:
    """Test cases for InvalidOptionsError."""

    def test_message_with_option(self):
        error = InvalidOptionsError("must be a boolean", "ssr")
        assert str(error) == "Invalid option 'ssr': must be a boolean"
        assert error.option == "ssr"
        assert error.original_message == "must be a boolean"

    def test_message_without_option(self):
        assert str(InvalidOptionsError("unknown option 'x'")) == "Invalid options: unknown option 'x'"


class TestConfigError:
    """Test cases for ConfigError."""

    def test_message_with_field(self):
        error = ConfigError("Invalid value", "css_framework")
        assert "field 'css_framework'" in str(error)
        assert error.config_field == "css_framework"

    def test_message_without_field(self):
        assert str(ConfigError("Configuration file is empty")) == "Configuration error: Configuration file is empty"


class TestFilesystemError:
    """Test cases for FilesystemError."""

    def test_stores_context(self):
        error = FilesystemError("/tmp/options.yaml", "read", "File not found")
        assert error.file_path == "/tmp/options.yaml"
        assert error.operation == "read"
        assert error.reason == "File not found"
        assert str(error) == "Filesystem operation 'read' failed for /tmp/options.yaml: File not found"


class TestStreamConsumedError:
    """Test cases for StreamConsumedError."""

    def test_mentions_state(self):
        error = StreamConsumedError("cancelled")
        assert error.state == "cancelled"
        assert "cancelled" in str(error)
