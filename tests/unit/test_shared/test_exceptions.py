"""
Unit tests for line_transport.shared.exceptions module.
"""

import pytest

from line_transport.shared.exceptions import (
    ConfigurationError,
    ConnectionStateError,
    InvalidConfigurationError,
    LineTransportError,
    MissingConfigurationError,
    NetworkError,
    NotConnectedError,
)


class TestLineTransportError:
    """Test base LineTransportError exception."""
    
    def test_basic_exception(self):
        """Test basic exception creation."""
        error = LineTransportError("Test error")
        
        assert str(error) == "Test error"
        assert isinstance(error, Exception)
    
    def test_exception_inheritance(self):
        """Test that all custom exceptions inherit from LineTransportError."""
        assert issubclass(NetworkError, LineTransportError)
        assert issubclass(ConnectionStateError, NetworkError)
        assert issubclass(NotConnectedError, ConnectionStateError)
        assert issubclass(ConfigurationError, LineTransportError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(MissingConfigurationError, ConfigurationError)
    
    def test_not_confused_with_socket_errors(self):
        """Test that the usage error is distinct from builtin socket errors."""
        assert not issubclass(NotConnectedError, OSError)
        assert not issubclass(NetworkError, ConnectionError)


class TestNetworkError:
    """Test NetworkError exception."""
    
    def test_network_error_attributes(self):
        """Test NetworkError carries operation and address."""
        error = NetworkError("boom", operation="send", address="127.0.0.1:8080")
        
        assert str(error) == "boom"
        assert error.operation == "send"
        assert error.address == "127.0.0.1:8080"
    
    def test_network_error_defaults(self):
        """Test NetworkError without context."""
        error = NetworkError("boom")
        
        assert error.operation is None
        assert error.address is None


class TestNotConnectedError:
    """Test NotConnectedError exception."""
    
    def test_message_names_operation(self):
        """Test the message mentions the attempted operation."""
        error = NotConnectedError("send")
        
        assert str(error) == "Cannot send: connection is not connected"
        assert error.operation == "send"
    
    def test_catchable_as_base(self):
        """Test that callers can catch the usage error through the base class."""
        with pytest.raises(LineTransportError):
            raise NotConnectedError("read line")


class TestConfigurationError:
    """Test ConfigurationError exception."""
    
    def test_configuration_error(self):
        """Test ConfigurationError creation."""
        error = ConfigurationError("Invalid config", details={"errors": ["bad"]})
        
        assert str(error) == "Invalid config"
        assert error.details == {"errors": ["bad"]}
    
    def test_configuration_error_without_details(self):
        """Test ConfigurationError without details."""
        assert ConfigurationError("Invalid config").details is None
