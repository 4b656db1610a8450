"""
Unit tests for chatroom.shared.exceptions module.
"""

import pytest

from chatroom.shared.exceptions import (
    ChatAppError,
    ConfigurationError,
    ConnectionSetupError,
    FatalError,
    InvalidConfigurationError,
    InvalidStateError,
    MissingConfigurationError,
    NetworkError,
    NotConnectedError,
    SessionError,
    TransportReadError,
    TransportWriteError,
)


class TestChatAppError:
    """Test base ChatAppError exception."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        error = ChatAppError("Test error")

        assert str(error) == "Test error"
        assert isinstance(error, Exception)

    def test_exception_with_cause(self):
        """Test exception with underlying cause."""
        cause = OSError("Original error")

        try:
            raise TransportWriteError("Wrapper error") from cause
        except ChatAppError as error:
            assert str(error) == "Wrapper error"
            assert error.__cause__ is cause

    def test_exception_inheritance(self):
        """Test that all custom exceptions inherit from ChatAppError."""
        for exc_class in (SessionError, InvalidStateError, NotConnectedError, NetworkError,
                          TransportWriteError, TransportReadError, FatalError,
                          ConnectionSetupError, ConfigurationError,
                          InvalidConfigurationError, MissingConfigurationError):
            assert issubclass(exc_class, ChatAppError)


class TestSessionErrors:
    """Test session state exceptions."""

    def test_invalid_state_attributes(self):
        """Test that state errors carry context."""
        error = InvalidStateError("Cannot start", state="open", operation="start")

        assert error.state == "open"
        assert error.operation == "start"

    def test_not_connected_is_invalid_state(self):
        """Test that NotConnectedError is an InvalidStateError."""
        with pytest.raises(InvalidStateError):
            raise NotConnectedError("Cannot send", state="created", operation="send")


class TestNetworkErrors:
    """Test transport exceptions."""

    def test_write_error(self):
        """Test TransportWriteError attributes."""
        error = TransportWriteError("Failed", address="localhost:80")

        assert isinstance(error, NetworkError)
        assert error.operation == "write"
        assert error.address == "localhost:80"

    def test_read_error(self):
        """Test TransportReadError attributes."""
        error = TransportReadError("Failed")

        assert error.operation == "read"
        assert error.address is None


class TestFatalErrors:
    """Test fatal exceptions."""

    def test_connection_setup_error(self):
        """Test that setup failures are fatal."""
        error = ConnectionSetupError("No streams", address="localhost:80")

        assert isinstance(error, FatalError)
        assert not isinstance(error, NetworkError)
        assert error.address == "localhost:80"


class TestConfigurationErrors:
    """Test configuration exceptions."""

    def test_configuration_error_details(self):
        """Test ConfigurationError details."""
        error = InvalidConfigurationError("Bad config", details={"errors": ["port"]})

        assert error.details == {"errors": ["port"]}
        assert ConfigurationError("x").details is None
