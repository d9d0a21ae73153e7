from typing import Any, AsyncIterable, AsyncIterator, NamedTuple, TypeAlias

from mypy_extensions import mypyc_attr

from ..config import DEFAULT_ENCODING
from ..errors import TransportError

# --
# Body streams are async iterators of `bytes`, they end with
# `StopAsyncIteration` and fail with a `TransportError`.

# -----------------------------------------------------------------------------
#
# CHUNKS
#
# -----------------------------------------------------------------------------


class HTTPBodyBlob(NamedTuple):
	"""Represents a part (or a whole) body as bytes, as produced by
	an HTTP parser."""

	payload: bytes = b""

	@staticmethod
	def FromBytes(data: bytes) -> "HTTPBodyBlob":
		return HTTPBodyBlob(payload=data)


# The different types of chunks a transport may produce
TChunk: TypeAlias = bytes | bytearray | memoryview | str | HTTPBodyBlob


def asBytes(chunk: TChunk) -> bytes:
	"""Normalizes a transport chunk as bytes."""
	if isinstance(chunk, bytes):
		return chunk
	elif isinstance(chunk, bytearray) or isinstance(chunk, memoryview):
		return bytes(chunk)
	elif isinstance(chunk, str):
		return chunk.encode(DEFAULT_ENCODING)
	elif isinstance(chunk, HTTPBodyBlob):
		return chunk.payload
	else:
		raise TransportError(f"Unsupported body chunk type: {type(chunk)}")


async def aclose(stream: Any) -> None:
	"""Closes the given stream if it supports it (async generators do)."""
	close = getattr(stream, "aclose", None)
	if close is not None:
		await close()


# -----------------------------------------------------------------------------
#
# STREAMS
#
# -----------------------------------------------------------------------------


@mypyc_attr(allow_interpreted_subclasses=True)
class BodyStream(AsyncIterator[bytes]):
	"""Base class for body streams."""

	def __aiter__(self) -> "BodyStream":
		return self

	async def __anext__(self) -> bytes:
		raise StopAsyncIteration

	async def aclose(self) -> None:
		pass


class EmptyBody(BodyStream):
	"""A body without any content, it ends on the first read."""

	def __repr__(self) -> str:
		return "EmptyBody()"


EMPTY: EmptyBody = EmptyBody()


class BodyBytes(BodyStream):
	"""Adapts a transport stream so that it produces `bytes` and fails
	with `TransportError`."""

	__slots__ = ["source", "iterator"]

	def __init__(self, source: AsyncIterable[TChunk]) -> None:
		self.source: AsyncIterable[TChunk] = source
		self.iterator: AsyncIterator[TChunk] | None = None

	async def __anext__(self) -> bytes:
		if self.iterator is None:
			self.iterator = self.source.__aiter__()
		try:
			chunk = await self.iterator.__anext__()
		except StopAsyncIteration:
			raise
		except TransportError:
			raise
		except Exception as e:
			raise TransportError.Wrap(e) from e
		return asBytes(chunk)

	async def aclose(self) -> None:
		await aclose(self.iterator if self.iterator is not None else self.source)
		self.iterator = None

	def __repr__(self) -> str:
		return f"BodyBytes({self.source!r})"


class Peekable(BodyStream):
	"""Wraps a body stream so that the next item can be looked at
	without being consumed.

	`peek()` returns the next chunk, `None` at the end of the stream, or
	the `TransportError` the stream failed with. The error is returned, not
	raised: it stays the next item, and it is only raised by the following
	`__anext__()`."""

	__slots__ = ["stream", "peeked", "hasPeeked"]

	def __init__(self, stream: BodyStream) -> None:
		self.stream: BodyStream = stream
		self.peeked: bytes | TransportError | None = None
		self.hasPeeked: bool = False

	async def peek(self) -> bytes | TransportError | None:
		if not self.hasPeeked:
			try:
				self.peeked = await self.stream.__anext__()
			except StopAsyncIteration:
				self.peeked = None
			except TransportError as e:
				self.peeked = e
			self.hasPeeked = True
		return self.peeked

	async def __anext__(self) -> bytes:
		if not self.hasPeeked:
			return await self.stream.__anext__()
		item = self.peeked
		self.peeked = None
		self.hasPeeked = False
		if item is None:
			raise StopAsyncIteration
		elif isinstance(item, TransportError):
			raise item
		else:
			return item

	async def aclose(self) -> None:
		self.peeked = None
		self.hasPeeked = False
		await self.stream.aclose()

	def __repr__(self) -> str:
		return f"Peekable({self.stream!r})"


# EOF
