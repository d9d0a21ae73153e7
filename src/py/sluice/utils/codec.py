import zlib
from abc import ABC, abstractmethod

from mypy_extensions import mypyc_attr


# NOTE: Transforms may be subclassed by interpreted code even when this
# module is compiled with mypyc.
@mypyc_attr(allow_interpreted_subclasses=True)
class BytesTransform(ABC):
	"""An abstract bytes transform."""

	@abstractmethod
	def feed(self, chunk: bytes) -> bytes:
		"""Feeds bytes to the transform, returns what could be produced
		so far (possibly empty)."""

	@abstractmethod
	def flush(self) -> bytes:
		"""Ensures that the transform is flushed, returning any remaining
		bytes."""


GZIP_WBITS: int = zlib.MAX_WBITS | 32


class GZipDecoder(BytesTransform):
	"""Decodes bytes as Gzip (or zlib, the header is auto-detected). A body
	may hold more than one gzip member, each one is decoded in turn.
	Malformed data, including data after a member that is not itself a
	member, raises `zlib.error` from `feed`, and `flush` raises when the
	stream ended before the gzip trailer."""

	__slots__ = ["decompressor", "limit", "full"]

	def __init__(self, limit: int = 0) -> None:
		super().__init__()
		self.decompressor = zlib.decompressobj(wbits=GZIP_WBITS)
		# When set, `feed` produces at most `limit` bytes, the rest being
		# available through `pending()`.
		self.limit: int = limit
		self.full: bool = False

	@property
	def eof(self) -> bool:
		"""Tells if the end of the current member was reached."""
		return self.decompressor.eof

	@property
	def hasPending(self) -> bool:
		"""Tells if more output may be available without new input, because
		the last output hit the limit."""
		d = self.decompressor
		return self.full or bool(d.unconsumed_tail) or (d.eof and bool(d.unused_data))

	def feed(self, chunk: bytes) -> bytes:
		res = bytearray()
		data: bytes = chunk
		while True:
			d = self.decompressor
			if d.eof:
				data = d.unused_data + data
				if not data:
					break
				# Another member follows the one that ended
				d = self.decompressor = zlib.decompressobj(wbits=GZIP_WBITS)
			res += d.decompress(data, self.limit - len(res) if self.limit else 0)
			data = b""
			if (self.limit and len(res) >= self.limit) or not (
				d.eof and d.unused_data
			):
				break
		self.full = self.limit > 0 and len(res) >= self.limit
		return bytes(res)

	def pending(self) -> bytes:
		"""Decodes the input that was held back by the output limit."""
		return self.feed(self.decompressor.unconsumed_tail)

	def flush(self) -> bytes:
		res = bytearray()
		while self.hasPending:
			res += self.pending()
		res += self.decompressor.flush()
		if not self.decompressor.eof:
			raise zlib.error("Truncated gzip stream, trailer is missing")
		return bytes(res)


# EOF
