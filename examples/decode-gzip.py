"""
Streaming GZip Decoding Example

This demonstrates decoding a gzip-encoded response body as it arrives.
Features shown:
- Header based detection, and stripping of stale headers
- Decompressed chunks that don't align with the received ones
- Empty gzip bodies resolving to plain text

Usage:
    python decode-gzip.py
"""

import asyncio
import gzip
from typing import AsyncIterator

from sluice import HTTPHeaders, HTTPResponse
from sluice.utils.logging import info


async def transport(payload: bytes, size: int = 512) -> AsyncIterator[bytes]:
	"""Simulates a slow connection delivering a gzip body."""
	data = gzip.compress(payload)
	for i in range(0, len(data), size):
		await asyncio.sleep(0.01)
		yield data[i : i + size]


async def empty() -> AsyncIterator[bytes]:
	return
	yield b""


async def main() -> None:
	payload = b"".join(f"line {i}: sluice\n".encode() for i in range(20_000))
	headers = HTTPHeaders.FromDict(
		{"Content-Type": "text/plain", "Content-Encoding": "gzip", "Content-Length": "1"}
	)
	info("Response headers", Headers=str(headers))
	total: int = 0
	async with HTTPResponse.Create(200, headers, transport(payload)) as res:
		info("Decoded headers", Headers=str(res.headers))
		while (chunk := await res.chunk()) is not None:
			total += len(chunk)
			info("Decoded chunk", Size=len(chunk), State=res.decoder.state)
	info("Decoding complete", Expected=len(payload), Decoded=total)

	# An empty gzip body is just empty
	nothing = HTTPResponse.Create(200, {"Content-Encoding": "gzip"}, empty())
	info("Empty body", Body=await nothing.load())


if __name__ == "__main__":
	asyncio.run(main())

# EOF
