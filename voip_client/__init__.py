from importlib.metadata import version as _pkg_version, PackageNotFoundError as _PkgNotFound

from .client import RESERVED_PARAMS, ApiGroup, VoipClient
from .config import ClientConfig, load_config
from .errors import (
    ConfigurationError,
    EncodingError,
    HTTPStatusError,
    MalformedResponseError,
    ReservedParameterError,
    StatusError,
    VoipError,
    VoipTransportError,
)
from .responses import BaseResponse, NumberValueDescription, RawResponse, StringValueDescription

try:
    __version__ = _pkg_version("voip-client")
except _PkgNotFound:
    __version__ = "dev"

__all__ = [
    "__version__",
    "ApiGroup",
    "BaseResponse",
    "ClientConfig",
    "ConfigurationError",
    "EncodingError",
    "HTTPStatusError",
    "MalformedResponseError",
    "NumberValueDescription",
    "RawResponse",
    "RESERVED_PARAMS",
    "ReservedParameterError",
    "StatusError",
    "StringValueDescription",
    "VoipClient",
    "VoipError",
    "VoipTransportError",
    "load_config",
]
