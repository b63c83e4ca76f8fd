"""
Configuration commands.

Stores defaults in settings.json and the connection string in the
system keyring.
"""

import typer
from keyring.errors import KeyringError

from cosmos2xlsx.constants import SETTING_KEYS
from cosmos2xlsx.logging import LogLevel, get_logger
from cosmos2xlsx.logging.utils import mask_connection_string
from cosmos2xlsx.utils.config_store import ConfigStore
from cosmos2xlsx.utils.console import display_panel, error, info, success, warning

app = typer.Typer(help="Manage stored settings and credentials")


def _validate_setting(key: str, value: str):
    """Convert and validate a setting value, raising ValueError if invalid"""
    if key not in SETTING_KEYS:
        raise ValueError(f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}")
    if key == "page_size":
        page_size = int(value)
        if page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        return page_size
    if key == "log_level":
        level = LogLevel.parse(value)
        if level is None:
            raise ValueError(
                f"Invalid log level '{value}'. Use one of: "
                f"{', '.join(lev.value for lev in LogLevel)}"
            )
        return level.value
    return value


@app.command("set-connection")
def set_connection(
    connection_string: str = typer.Option(
        ...,
        "--connection-string",
        "-c",
        prompt="Cosmos DB connection string",
        hide_input=True,
        help="Connection string to store in the system keyring",
    ),
) -> None:
    """Store the Cosmos DB connection string in the system keyring"""
    logger = get_logger("cosmos2xlsx.commands.config")
    try:
        ConfigStore().store_connection_string(connection_string)
    except KeyringError as e:
        logger.error(f"Failed to store connection string: {e}")
        error(f"Failed to store connection string: {e}")
        raise typer.Exit(1)

    logger.info("Connection string stored in keyring")
    success("Connection string stored securely")


@app.command("clear-connection")
def clear_connection() -> None:
    """Remove the stored connection string"""
    try:
        removed = ConfigStore().delete_connection_string()
    except KeyringError as e:
        error(f"Failed to remove connection string: {e}")
        raise typer.Exit(1)

    if removed:
        success("Stored connection string removed")
    else:
        info("No stored connection string")


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(SETTING_KEYS)})"),
    value: str = typer.Argument(..., help="Setting value"),
) -> None:
    """Store a default setting"""
    try:
        converted = _validate_setting(key, value)
        ConfigStore().set_setting(key, converted)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1)

    get_logger("cosmos2xlsx.commands.config").info(f"Setting '{key}' updated")
    success(f"{key} = {converted}")


@app.command("unset")
def unset_value(
    key: str = typer.Argument(..., help="Setting name"),
) -> None:
    """Remove a stored setting"""
    if ConfigStore().unset_setting(key):
        success(f"{key} removed")
    else:
        warning(f"Setting '{key}' is not set")


@app.command("show")
def show_config() -> None:
    """Show stored settings with the connection string masked"""
    store = ConfigStore()
    settings = store.get_settings()

    try:
        connection_string = store.get_connection_string()
        connection = mask_connection_string(connection_string) if connection_string else "not set"
    except KeyringError:
        connection = "keyring unavailable"

    lines = [f"connection_string: {connection}"]
    lines.extend(f"{key}: {settings.get(key, 'not set')}" for key in SETTING_KEYS)
    lines.append(f"config_dir: {store.base_dir}")
    display_panel("\n".join(lines), "cosmos2xlsx configuration", "blue")
