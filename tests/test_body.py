import asyncio
from typing import Any, AsyncIterator

import pytest

from sluice.errors import TransportError
from sluice.http.body import EMPTY, BodyBytes, HTTPBodyBlob, Peekable, asBytes


async def chunks(*items: Any) -> AsyncIterator[Any]:
	for _ in items:
		if isinstance(_, Exception):
			raise _
		yield _


async def drain(stream: Any) -> list[bytes]:
	return [_ async for _ in stream]


def test_as_bytes():
	assert asBytes(b"a") == b"a"
	assert asBytes(bytearray(b"b")) == b"b"
	assert asBytes(memoryview(b"c")) == b"c"
	assert asBytes("d") == b"d"
	assert asBytes(HTTPBodyBlob.FromBytes(b"e")) == b"e"
	assert HTTPBodyBlob.FromBytes(b"e") == HTTPBodyBlob(b"e")
	with pytest.raises(TransportError):
		asBytes(1)  # type: ignore[arg-type]


def test_body_bytes_normalizes_chunks():
	body = BodyBytes(chunks(b"a", bytearray(b"b"), "c", HTTPBodyBlob.FromBytes(b"d")))
	res = asyncio.run(drain(body))
	assert res == [b"a", b"b", b"c", b"d"]
	assert all(type(_) is bytes for _ in res)


def test_body_bytes_wraps_errors():
	async def main() -> None:
		body = BodyBytes(chunks(b"a", ConnectionResetError("reset")))
		assert await body.__anext__() == b"a"
		with pytest.raises(TransportError) as e:
			await body.__anext__()
		assert isinstance(e.value.cause, ConnectionResetError)

	asyncio.run(main())


def test_empty():
	assert asyncio.run(drain(EMPTY)) == []


def test_peek_does_not_consume():
	async def main() -> None:
		body = Peekable(BodyBytes(chunks(b"a", b"b")))
		assert await body.peek() == b"a"
		assert await body.peek() == b"a"
		assert await body.__anext__() == b"a"
		assert await body.peek() == b"b"
		assert await drain(body) == [b"b"]
		assert await body.peek() is None

	asyncio.run(main())


def test_peek_returns_error_then_raises_it():
	async def main() -> None:
		body = Peekable(BodyBytes(chunks(OSError("boom"))))
		err = await body.peek()
		assert isinstance(err, TransportError)
		with pytest.raises(TransportError) as e:
			await body.__anext__()
		assert e.value is err

	asyncio.run(main())


def test_close_releases_source():
	closed: list[bool] = []

	async def source() -> AsyncIterator[bytes]:
		try:
			yield b"a"
			yield b"b"
		finally:
			closed.append(True)

	async def main() -> None:
		body = Peekable(BodyBytes(source()))
		assert await body.peek() == b"a"
		await body.aclose()

	asyncio.run(main())
	assert closed == [True]


# EOF
