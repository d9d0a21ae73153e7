from .errors import DecodeError, DecodeErrorKind, TransportError  # NOQA: F401
from .http.headers import HTTPHeaders  # NOQA: F401
from .http.decoder import Decoder, Decision, detect  # NOQA: F401
from .http.response import HTTPResponse  # NOQA: F401

__version__ = "0.1.0"

# EOF
