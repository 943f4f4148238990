"""
Configuration Management

Provides the connection configuration class and environment- and
file-based configuration loading.
"""

import codecs
import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import (
    DEFAULT_ENCODING,
    DEFAULT_ENCODING_ERRORS,
    DEFAULT_KEEPALIVE,
    ENV_PREFIX,
    VALID_ENCODING_ERRORS,
)
from .exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)


# ConnectionConfig field -> environment variable
ENV_FIELDS = {
    "encoding": f"{ENV_PREFIX}ENCODING",
    "encoding_errors": f"{ENV_PREFIX}ENCODING_ERRORS",
    "enable_keepalive": f"{ENV_PREFIX}KEEPALIVE",
}


@dataclass
class ConnectionConfig:
    """Connection configuration settings."""
    
    encoding: str = DEFAULT_ENCODING
    encoding_errors: str = DEFAULT_ENCODING_ERRORS
    enable_keepalive: bool = DEFAULT_KEEPALIVE
    
    def validate(self) -> None:
        """Validate configuration values."""
        errors: List[str] = []
        
        if not isinstance(self.encoding, str) or not self.encoding.strip():
            errors.append("encoding must be a non-empty string")
        else:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                errors.append(f"encoding '{self.encoding}' is not a known codec")
        
        if self.encoding_errors not in VALID_ENCODING_ERRORS:
            errors.append(f"encoding_errors must be one of: {', '.join(VALID_ENCODING_ERRORS)}")
        
        if not isinstance(self.enable_keepalive, bool):
            errors.append("enable_keepalive must be a boolean")
        
        if errors:
            raise InvalidConfigurationError(
                f"Connection configuration validation failed: {'; '.join(errors)}",
                details={"errors": errors}
            )
    
    @staticmethod
    def env_overrides() -> Dict[str, Any]:
        """Return the field values set through environment variables."""
        overrides: Dict[str, Any] = {}
        for field_name, env_name in ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value is None:
                continue
            if field_name == "enable_keepalive":
                overrides[field_name] = value.lower() == "true"
            else:
                overrides[field_name] = value
        return overrides
    
    @classmethod
    def from_env(cls) -> "ConnectionConfig":
        """Load configuration from environment variables."""
        config = cls(**cls.env_overrides())
        config.validate()
        return config
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionConfig":
        """Create configuration from dictionary."""
        try:
            # Filter only known fields
            field_names = {f.name for f in fields(cls)}
            filtered_data = {k: v for k, v in data.items() if k in field_names}
            config = cls(**filtered_data)
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Failed to create connection configuration from dictionary: {e}")
        config.validate()
        return config


class ConfigurationLoader:
    """Configuration loader with support for multiple sources."""
    
    DEFAULT_CONFIG_PATHS = [
        "line_transport.json",
        ".line_transport.json",
        "line_transport.yaml",
        ".line_transport.yaml",
        "line_transport.yml",
        ".line_transport.yml",
    ]
    
    @staticmethod
    def find_default_config() -> Optional[str]:
        """Return the first default configuration file that exists."""
        for path in ConfigurationLoader.DEFAULT_CONFIG_PATHS:
            if os.path.exists(path):
                return path
        return None
    
    @staticmethod
    def load_from_file(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
        """
        Load configuration from a JSON or YAML file.
        
        Args:
            config_path: Path to configuration file. If None, looks for default locations.
            
        Returns:
            Dictionary containing configuration values.
            
        Raises:
            MissingConfigurationError: If an explicit path does not exist.
            ConfigurationError: If the file cannot be loaded or parsed.
        """
        if config_path is None:
            config_path = ConfigurationLoader.find_default_config()
        
        if config_path is None:
            return {}
        
        config_path = Path(config_path)
        
        if not config_path.exists():
            raise MissingConfigurationError(f"Configuration file not found: {config_path}")
        
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix == '.json':
                    data = json.load(f)
                elif config_path.suffix in ('.yml', '.yaml'):
                    try:
                        import yaml
                    except ImportError:
                        raise ConfigurationError("PyYAML is required for YAML configuration files. Install with: pip install PyYAML")
                    data = yaml.safe_load(f) or {}
                else:
                    raise ConfigurationError(f"Unsupported configuration file format: {config_path.suffix}")
        except ConfigurationError:
            raise
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}")
        
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
        return data
    
    @staticmethod
    def load_connection_config(
        config_path: Optional[Union[str, Path]] = None,
        use_env: bool = True
    ) -> ConnectionConfig:
        """
        Load connection configuration from file and/or environment.
        
        Values come from the ``connection`` section of the file; any
        environment variable that is set overrides the file, even when it
        holds the default value.
        
        Args:
            config_path: Path to configuration file.
            use_env: Whether to load from environment variables.
            
        Returns:
            ConnectionConfig instance.
        """
        file_config = ConfigurationLoader.load_from_file(config_path)
        config_data = file_config.get('connection', {})
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"'connection' section in {config_path or 'configuration file'} must be a mapping"
            )
        
        if config_data:
            config = ConnectionConfig.from_dict(config_data)
        else:
            config = ConnectionConfig()
        
        if use_env:
            for field_name, env_value in ConnectionConfig.env_overrides().items():
                setattr(config, field_name, env_value)
        
        config.validate()
        return config
