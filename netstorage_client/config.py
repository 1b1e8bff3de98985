import configparser
from dataclasses import dataclass
from pathlib import Path

_TRUE_VALUES = ("true", "1", "yes")


@dataclass
class NetStorageConfig:
    host: str
    keyname: str
    key: str
    ssl: bool = True  # https when True, http otherwise


@dataclass
class ConnectionConfig:
    timeout_seconds: int = 30


@dataclass
class LogConfig:
    level: str = "INFO"
    file: str = ""
    console: bool = True


@dataclass
class AppConfig:
    netstorage: NetStorageConfig
    connection: ConnectionConfig
    logging: LogConfig


def load_config(config_path: str | None = None, **cli_args) -> AppConfig:
    """
    Load configuration from an INI file and/or CLI arguments.
    CLI arguments take precedence over config file.

    Args:
        config_path: Path to the INI configuration file.
        **cli_args: Key-value pairs from command line arguments.

    Returns:
        AppConfig: The populated configuration object.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If required fields (host, keyname, key) are missing.
    """
    # Initialize with defaults
    ns_config = {
        "host": None,
        "keyname": None,
        "key": None,
        "ssl": True,
    }
    connection_config = {
        "timeout_seconds": 30,
    }
    log_config = {
        "level": "INFO",
        "file": "",
        "console": True,
    }

    # Parse INI file if provided
    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        parser = configparser.ConfigParser(interpolation=None)
        parser.read(config_file, encoding="utf-8")

        # Load [netstorage] section
        if parser.has_section("netstorage"):
            ns_section = parser["netstorage"]
            for name in ("host", "keyname", "key"):
                if ns_section.get(name):
                    ns_config[name] = ns_section.get(name)
            if ns_section.get("ssl"):
                ns_config["ssl"] = ns_section.get("ssl", "true").lower() in _TRUE_VALUES

        # Load [connection] section
        if parser.has_section("connection"):
            conn_section = parser["connection"]
            if conn_section.get("timeout_seconds"):
                try:
                    connection_config["timeout_seconds"] = int(conn_section.get("timeout_seconds"))
                except ValueError:
                    raise ValueError(
                        f"Invalid timeout_seconds value in config: '{conn_section.get('timeout_seconds')}' - must be an integer"
                    )

        # Load [logging] section
        if parser.has_section("logging"):
            log_section = parser["logging"]
            if log_section.get("level"):
                log_config["level"] = log_section.get("level")
            if log_section.get("file"):
                log_config["file"] = log_section.get("file")
            if log_section.get("console"):
                log_config["console"] = log_section.get("console", "false").lower() in _TRUE_VALUES

    # Override with CLI arguments (cli_args take precedence)
    for name in ("host", "keyname", "key"):
        if cli_args.get(name) is not None:
            ns_config[name] = cli_args[name]
    if cli_args.get("ssl") is not None:
        ns_config["ssl"] = bool(cli_args["ssl"])
    if cli_args.get("timeout") is not None:
        connection_config["timeout_seconds"] = int(cli_args["timeout"])
    if cli_args.get("debug"):
        log_config["level"] = "DEBUG"
        log_config["console"] = True

    # Validate required fields
    missing_fields = [name for name in ("host", "keyname", "key") if not ns_config[name]]
    if missing_fields:
        raise ValueError(f"Missing required configuration fields: {', '.join(missing_fields)}")

    if connection_config["timeout_seconds"] <= 0:
        raise ValueError(
            f"Invalid timeout_seconds: {connection_config['timeout_seconds']} - must be positive"
        )

    return AppConfig(
        netstorage=NetStorageConfig(
            host=ns_config["host"],
            keyname=ns_config["keyname"],
            key=ns_config["key"],
            ssl=ns_config["ssl"],
        ),
        connection=ConnectionConfig(
            timeout_seconds=connection_config["timeout_seconds"],
        ),
        logging=LogConfig(
            level=log_config["level"],
            file=log_config["file"],
            console=log_config["console"],
        ),
    )
