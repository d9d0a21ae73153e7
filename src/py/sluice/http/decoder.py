import zlib
from enum import Enum
from typing import AsyncIterable, NamedTuple, TypeAlias, Union

from ..config import CHUNK_SIZE, GZIP
from ..errors import DecodeError, TransportError
from ..utils.codec import GZipDecoder
from ..utils.logging import error, event, warning
from .body import EMPTY, BodyBytes, BodyStream, Peekable, TChunk
from .headers import HTTPHeaders

# --
# A non-blocking response decoder.
#
# The decoder wraps a stream of chunks and produces a new stream of
# decompressed chunks. The decompressed chunks aren't guaranteed to align
# to the compressed ones.
#
# If the response is plain text then chunks are just passed along. If the
# response is gzip, the chunks are decompressed and slices of the
# decompressed data are emitted as new chunks.

# -----------------------------------------------------------------------------
#
# DETECTION
#
# -----------------------------------------------------------------------------


class Decision(Enum):
	PassThrough = 0
	UseDecompression = 1


def detect(headers: HTTPHeaders, check: bool = True) -> Decision:
	"""Decides from the headers if the body is to be decompressed. When the
	body is declared as `Content-Encoding: gzip`, the `Content-Encoding` and
	`Content-Length` headers are removed as they won't describe the decoded
	body anymore."""
	if not check:
		return Decision.PassThrough
	content_gzip: bool = any(_ == "gzip" for _ in headers.getAll("Content-Encoding"))
	is_gzip: bool = content_gzip or any(
		_ == "gzip" for _ in headers.getAll("Transfer-Encoding")
	)
	if is_gzip and headers.get("Content-Length") == "0":
		warning("Gzip response with a Content-Length of 0, treated as plain text")
		is_gzip = False
	# NOTE: Only `Content-Encoding` strips the headers, `Transfer-Encoding`
	# is hop-by-hop and describes the framing, not the content.
	if content_gzip:
		headers.remove("Content-Encoding")
		headers.remove("Content-Length")
	return Decision.UseDecompression if is_gzip else Decision.PassThrough


# -----------------------------------------------------------------------------
#
# DECOMPRESSION
#
# -----------------------------------------------------------------------------


class GZipStream(BodyStream):
	"""Decompresses a gzip body stream. Output chunks are at most `size`
	bytes and never empty. Malformed or truncated data raises `zlib.error`,
	a failing input stream raises `TransportError`."""

	__slots__ = ["stream", "decoder", "ended"]

	def __init__(self, stream: BodyStream, size: int = CHUNK_SIZE) -> None:
		self.stream: BodyStream = stream
		self.decoder: GZipDecoder | None = GZipDecoder(limit=size)
		self.ended: bool = False

	async def __anext__(self) -> bytes:
		decoder = self.decoder
		if decoder is None:
			raise StopAsyncIteration
		while True:
			if decoder.hasPending:
				chunk = decoder.pending()
			elif self.ended:
				chunk = decoder.flush()
				self.decoder = None
				if chunk:
					return chunk
				raise StopAsyncIteration
			else:
				try:
					data = await self.stream.__anext__()
				except StopAsyncIteration:
					self.ended = True
					continue
				chunk = decoder.feed(data)
			if chunk:
				return chunk

	async def aclose(self) -> None:
		self.decoder = None
		await self.stream.aclose()

	def __repr__(self) -> str:
		return f"GZipStream({self.stream!r})"


# -----------------------------------------------------------------------------
#
# DECODER STATES
#
# -----------------------------------------------------------------------------


class PlainText(NamedTuple):
	"""Returns the response content as is."""

	body: BodyStream


class Gzip(NamedTuple):
	"""Decompresses the gzipped response content before returning it."""

	stream: GZipStream


class Pending(NamedTuple):
	"""Doesn't know yet if the body is empty, and so if it should be
	decompressed."""

	body: Peekable

	async def resolve(self) -> Union[PlainText, Gzip]:
		"""Peeks at the body to resolve the actual state. An empty body
		is plain text, as there is nothing to decompress."""
		while True:
			item = await self.body.peek()
			if item is None:
				return PlainText(EMPTY)
			elif isinstance(item, TransportError):
				# The peeked error stays in the stream, reading it raises it.
				await self.body.__anext__()
				raise item
			elif not item:
				# An empty chunk doesn't tell an empty body from a non-empty
				# one, and no decompressor is built before we know.
				await self.body.__anext__()
			else:
				return Gzip(GZipStream(self.body))


TDecoderState: TypeAlias = PlainText | Gzip | Pending


# -----------------------------------------------------------------------------
#
# DECODER
#
# -----------------------------------------------------------------------------


class Decoder(BodyStream):
	"""A response decompressor over a non-blocking stream of chunks,
	which decides lazily how to decode the body."""

	__slots__ = ["inner", "busy", "closing"]

	@staticmethod
	def Empty() -> "Decoder":
		"""A decoder that ends straight away."""
		return Decoder(PlainText(EMPTY))

	@staticmethod
	def FromHeaders(
		headers: HTTPHeaders,
		body: AsyncIterable[TChunk],
		check: bool | None = None,
	) -> "Decoder":
		"""Creates the decoder for a response body, based on its headers,
		which may be updated. Detection is disabled when `check` is
		false, and defaults to the `SLUICE_GZIP` configuration."""
		stream = BodyBytes(body)
		if detect(headers, GZIP if check is None else check) is Decision.UseDecompression:
			return Decoder(Pending(Peekable(stream)))
		else:
			return Decoder(PlainText(stream))

	def __init__(self, inner: TDecoderState) -> None:
		self.inner: TDecoderState = inner
		self.busy: bool = False
		# Set when closing was requested while a read was in flight
		self.closing: bool = False

	@property
	def state(self) -> str:
		inner = self.inner
		if isinstance(inner, PlainText):
			return "plain"
		elif isinstance(inner, Gzip):
			return "gzip"
		else:
			return "pending"

	async def __anext__(self) -> bytes:
		if self.busy:
			raise RuntimeError("Decoder is already being read from")
		self.busy = True
		try:
			return await self._next()
		except DecodeError:
			# After a failure, the decoder only ends
			self.closing = True
			raise
		finally:
			self.busy = False
			if self.closing:
				await self.aclose()

	async def _next(self) -> bytes:
		while True:
			inner = self.inner
			if isinstance(inner, PlainText):
				try:
					return await inner.body.__anext__()
				except TransportError as e:
					raise self._failed(DecodeError.FromTransport(e)) from e
			elif isinstance(inner, Gzip):
				try:
					return await inner.stream.__anext__()
				except TransportError as e:
					raise self._failed(DecodeError.FromTransport(e)) from e
				except zlib.error as e:
					raise self._failed(
						DecodeError.FromPayload(f"Malformed gzip body: {e}", e)
					) from e
			elif isinstance(inner, Pending):
				try:
					self.inner = await inner.resolve()
				except TransportError as e:
					raise self._failed(DecodeError.FromTransport(e)) from e
				event("decoder.resolved", self.state)
			else:
				raise RuntimeError(f"Unsupported decoder state: {inner}")

	def _failed(self, err: DecodeError) -> DecodeError:
		error("Response body decoding failed", err.kind.name, Reason=err.message)
		return err

	async def aclose(self) -> None:
		"""Releases the underlying stream and decompressor. When a read is
		in flight, the release happens once that read returns."""
		if self.busy:
			self.closing = True
			return
		self.closing = False
		inner = self.inner
		self.inner = PlainText(EMPTY)
		if isinstance(inner, PlainText):
			await inner.body.aclose()
		elif isinstance(inner, Gzip):
			await inner.stream.aclose()
		else:
			await inner.body.aclose()

	async def __aenter__(self) -> "Decoder":
		return self

	async def __aexit__(self, type: object, value: object, traceback: object) -> None:
		await self.aclose()

	def __repr__(self) -> str:
		return f"Decoder({self.state})"


# EOF
