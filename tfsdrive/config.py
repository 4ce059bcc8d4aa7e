"""
Configuration management for tfsdrive.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/tfsdrive/config.json
- Fallback: ~/.tfsdrive/config.json

Passwords are never stored; a drive's password is read from the
TFSDRIVE_PASSWORD environment variable when the drive names a user.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

PASSWORD_ENV = "TFSDRIVE_PASSWORD"


@dataclass
class ConnectionConfig:
    """Remote service connection settings."""
    timeout: float = 30.0
    verify_ssl: bool = True
    entry_query: str = "/**"


@dataclass
class ResolverConfig:
    """Path resolution settings."""
    case_sensitive: bool = True
    show_collections: bool = False


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


@dataclass
class DriveConfig:
    """A mounted drive."""
    name: str
    uri: str
    username: Optional[str] = None
    description: str = ""


@dataclass
class TFSDriveConfig:
    """Main tfsdrive configuration."""
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
    drives: Dict[str, DriveConfig] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "connection": asdict(self.connection),
            "resolver": asdict(self.resolver),
            "cli": asdict(self.cli),
            "drives": {name: asdict(drive) for name, drive in self.drives.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TFSDriveConfig':
        """Create from dictionary."""
        drives = {}
        for name, drive_data in data.get("drives", {}).items():
            drive_data = dict(drive_data)
            drive_data.setdefault("name", name)
            drives[name] = DriveConfig(**drive_data)
        return cls(
            connection=ConnectionConfig(**data.get("connection", {})),
            resolver=ResolverConfig(**data.get("resolver", {})),
            cli=CLIConfig(**data.get("cli", {})),
            drives=drives,
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. ~/.config/tfsdrive/config.json
    2. Fallback: ~/.tfsdrive/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "tfsdrive"
    else:
        config_dir = Path.home() / ".tfsdrive"

    return config_dir / "config.json"


def load_config() -> TFSDriveConfig:
    """
    Load configuration from file.

    Returns:
        TFSDriveConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return TFSDriveConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        return TFSDriveConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Using default configuration")
        return TFSDriveConfig()


def save_config(config: TFSDriveConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def update_config(
    # Connection settings
    timeout: Optional[float] = None,
    verify_ssl: Optional[bool] = None,
    entry_query: Optional[str] = None,
    # Resolver settings
    case_sensitive: Optional[bool] = None,
    show_collections: Optional[bool] = None,
    # CLI settings
    verbose: Optional[bool] = None,
    color: Optional[bool] = None,
) -> TFSDriveConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.
    """
    config = load_config()

    if timeout is not None:
        config.connection.timeout = timeout
    if verify_ssl is not None:
        config.connection.verify_ssl = verify_ssl
    if entry_query is not None:
        config.connection.entry_query = entry_query

    if case_sensitive is not None:
        config.resolver.case_sensitive = case_sensitive
    if show_collections is not None:
        config.resolver.show_collections = show_collections

    if verbose is not None:
        config.cli.verbose = verbose
    if color is not None:
        config.cli.color = color

    save_config(config)
    return config
