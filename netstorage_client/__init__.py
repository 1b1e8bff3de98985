__version__ = "0.1.0"

# Public API exports
from .cancellation import CancelToken
from .client import NetStorage
from .config import (
    AppConfig,
    ConnectionConfig,
    LogConfig,
    NetStorageConfig,
    load_config,
)
from .credentials import Credentials
from .errors import (
    Cancelled,
    InvalidArgument,
    InvalidPath,
    IOFailure,
    NetStorageError,
    RemoteError,
    SigningFailure,
    TransportFailure,
)
from .operation import LocalFile, Operation, Stream
from .response import DOWNLOAD_DONE, BufferAsText, DownloadToFile, NetStorageResult

__all__ = [
    "__version__",
    # Configuration
    "AppConfig",
    "NetStorageConfig",
    "ConnectionConfig",
    "LogConfig",
    "load_config",
    # Client
    "NetStorage",
    "Credentials",
    "CancelToken",
    "NetStorageResult",
    "DOWNLOAD_DONE",
    # Operations
    "Operation",
    "LocalFile",
    "Stream",
    "BufferAsText",
    "DownloadToFile",
    # Errors
    "NetStorageError",
    "InvalidArgument",
    "InvalidPath",
    "IOFailure",
    "SigningFailure",
    "TransportFailure",
    "Cancelled",
    "RemoteError",
]
