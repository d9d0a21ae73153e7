from enum import Enum

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class DecodeErrorKind(Enum):
	"""Tells where a decoding failure comes from."""

	Transport = 0  # The underlying byte stream failed
	Payload = 1  # The body bytes are not valid compressed data


class TransportError(Exception):
	"""Wraps a failure of the underlying byte stream (connection reset,
	timeout, framing violation). The original exception is available as
	`cause`."""

	def __init__(self, message: str, cause: BaseException | None = None):
		super().__init__(message)
		self.message: str = message
		self.cause: BaseException | None = cause
		if cause is not None:
			self.__cause__ = cause

	@staticmethod
	def Wrap(error: BaseException) -> "TransportError":
		"""Returns the error as a transport error, wrapping it if needed."""
		return (
			error
			if isinstance(error, TransportError)
			else TransportError(f"{error.__class__.__name__}: {error}", error)
		)


class DecodeError(Exception):
	"""The single error type surfaced by the response decoder."""

	def __init__(
		self,
		message: str,
		kind: DecodeErrorKind = DecodeErrorKind.Payload,
		cause: BaseException | None = None,
	):
		super().__init__(message)
		self.message: str = message
		self.kind: DecodeErrorKind = kind
		self.cause: BaseException | None = cause
		if cause is not None:
			self.__cause__ = cause

	@property
	def isTransport(self) -> bool:
		return self.kind is DecodeErrorKind.Transport

	@property
	def isPayload(self) -> bool:
		return self.kind is DecodeErrorKind.Payload

	@staticmethod
	def FromTransport(error: TransportError) -> "DecodeError":
		return DecodeError(
			f"Body stream failed: {error.message}", DecodeErrorKind.Transport, error
		)

	@staticmethod
	def FromPayload(message: str, cause: BaseException | None = None) -> "DecodeError":
		return DecodeError(message, DecodeErrorKind.Payload, cause)

	def __str__(self) -> str:
		return f"[{self.kind.name}] {self.message}"


# EOF
