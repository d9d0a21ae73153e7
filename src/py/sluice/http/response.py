import json as basejson
from typing import Any, AsyncIterable, AsyncIterator, Mapping

from ..config import DEFAULT_ENCODING
from .body import TChunk
from .decoder import Decoder
from .headers import HTTPHeaders

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def charset(contentType: str | None) -> str | None:
	"""Extracts the `charset` parameter of a content type, if any."""
	if not contentType:
		return None
	for param in contentType.split(";")[1:]:
		k, _, v = param.partition("=")
		if k.strip().lower() == "charset" and v.strip():
			return v.strip().strip("\"'")
	return None


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponse:
	"""A response as received by a client, with a transparently decoded
	body."""

	__slots__ = ["protocol", "status", "message", "headers", "decoder"]

	@staticmethod
	def Create(
		status: int,
		headers: HTTPHeaders | Mapping[str, str | list[str]] | None = None,
		body: AsyncIterable[TChunk] | None = None,
		*,
		method: str = "GET",
		gzip: bool | None = None,
		message: str | None = None,
		protocol: str = "HTTP/1.1",
	) -> "HTTPResponse":
		"""Factory method to create responses from the received head and
		body stream. Responses to `HEAD` requests are never decompressed,
		and `gzip=False` opts out of decompression."""
		h: HTTPHeaders = (
			headers
			if isinstance(headers, HTTPHeaders)
			else HTTPHeaders.FromDict(headers or {})
		)
		decoder: Decoder = (
			Decoder.Empty()
			if body is None
			else Decoder.FromHeaders(
				h,
				body,
				False if method.upper() == "HEAD" or gzip is False else gzip,
			)
		)
		return HTTPResponse(protocol, status, message, h, decoder)

	def __init__(
		self,
		protocol: str,
		status: int,
		message: str | None,
		headers: HTTPHeaders,
		decoder: Decoder,
	):
		self.protocol: str = protocol
		self.status: int = status
		self.message: str | None = message
		self.headers: HTTPHeaders = headers
		self.decoder: Decoder = decoder

	@property
	def contentType(self) -> str | None:
		return self.headers.contentType

	@property
	def contentLength(self) -> int | None:
		"""The length of the decoded body, when known."""
		return self.headers.contentLength

	async def chunk(self) -> bytes | None:
		"""Returns the next decoded chunk, or `None` at the end of the body."""
		try:
			return await self.decoder.__anext__()
		except StopAsyncIteration:
			return None

	async def stream(self) -> AsyncIterator[bytes]:
		async for chunk in self.decoder:
			yield chunk

	async def load(self) -> bytes:
		"""Fully loads the decoded body."""
		res = bytearray()
		async for chunk in self.decoder:
			res += chunk
		return bytes(res)

	async def text(self, encoding: str | None = None) -> str:
		"""Loads the body as text, decoded with the given encoding, the
		`charset` of the content type, or UTF-8."""
		data = await self.load()
		enc = encoding or charset(self.contentType) or DEFAULT_ENCODING
		try:
			return data.decode(enc, errors="replace")
		except LookupError:
			return data.decode(DEFAULT_ENCODING, errors="replace")

	async def json(self) -> Any:
		return basejson.loads(await self.load())

	async def aclose(self) -> None:
		await self.decoder.aclose()

	async def __aenter__(self) -> "HTTPResponse":
		return self

	async def __aexit__(self, type: object, value: object, traceback: object) -> None:
		await self.aclose()

	def __str__(self) -> str:
		return f"Response({self.protocol} {self.status} {self.message} {self.headers} {self.decoder!r})"


# EOF
