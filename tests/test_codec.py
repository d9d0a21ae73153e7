import gzip
import zlib

import pytest

from sluice.utils.codec import GZipDecoder


def test_decoder_accepts_zlib_framing():
	decoder = GZipDecoder()
	assert decoder.feed(zlib.compress(b"zlib framed")) == b"zlib framed"
	assert decoder.eof
	assert decoder.flush() == b""


def test_decoder_limit():
	decoder = GZipDecoder(limit=10)
	res = [decoder.feed(gzip.compress(b"0123456789" * 5))]
	while decoder.hasPending:
		res.append(decoder.pending())
	assert b"".join(res) == b"0123456789" * 5
	assert all(len(_) <= 10 for _ in res)
	assert decoder.flush() == b""


def test_decoder_bad_magic():
	with pytest.raises(zlib.error):
		GZipDecoder().feed(b"not compressed at all")


def test_decoder_truncated():
	decoder = GZipDecoder()
	decoder.feed(gzip.compress(b"abc" * 10)[:-2])
	with pytest.raises(zlib.error):
		decoder.flush()


def test_decoder_trailing_data():
	decoder = GZipDecoder()
	with pytest.raises(zlib.error):
		decoder.feed(gzip.compress(b"abc") + b"tail")
	decoder = GZipDecoder()
	decoder.feed(gzip.compress(b"abc"))
	with pytest.raises(zlib.error):
		decoder.feed(b"tail")


def test_decoder_members():
	data = gzip.compress(b"first ") + gzip.compress(b"second")
	assert GZipDecoder().feed(data) == b"first second"
	# The next member arrives in a later chunk
	decoder = GZipDecoder()
	assert decoder.feed(gzip.compress(b"first ")) == b"first "
	assert decoder.eof
	assert decoder.feed(gzip.compress(b"second")) == b"second"
	assert decoder.flush() == b""


def test_decoder_members_with_limit():
	data = gzip.compress(b"a" * 25) + gzip.compress(b"b" * 25)
	decoder = GZipDecoder(limit=10)
	res = [decoder.feed(data)]
	while decoder.hasPending:
		res.append(decoder.pending())
	assert b"".join(res) == b"a" * 25 + b"b" * 25
	assert all(len(_) <= 10 for _ in res)
	assert decoder.flush() == b""


def test_decoder_truncated_member():
	decoder = GZipDecoder()
	decoder.feed(gzip.compress(b"first") + gzip.compress(b"second")[:-3])
	with pytest.raises(zlib.error):
		decoder.flush()


# EOF
