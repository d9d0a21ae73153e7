from sluice.http.decoder import Decision, detect
from sluice.http.headers import HTTPHeaders


def test_content_encoding_gzip_strips_headers():
	for length in (None, "120", "1"):
		h = HTTPHeaders.FromDict({"Content-Encoding": "gzip", "Content-Type": "text/plain"})
		if length is not None:
			h.add("Content-Length", length)
		assert detect(h) is Decision.UseDecompression
		assert "Content-Encoding" not in h
		assert "Content-Length" not in h
		assert h.get("Content-Type") == "text/plain"


def test_gzip_among_several_encodings():
	h = HTTPHeaders.FromPairs(
		[("Content-Encoding", "identity"), ("Content-Encoding", "gzip")]
	)
	assert detect(h) is Decision.UseDecompression
	assert h.getAll("Content-Encoding") == []


def test_zero_length_is_plain_but_still_stripped():
	h = HTTPHeaders.FromDict({"Content-Encoding": "gzip", "Content-Length": "0"})
	assert detect(h) is Decision.PassThrough
	assert "Content-Encoding" not in h
	assert "Content-Length" not in h


def test_transfer_encoding_keeps_headers():
	h = HTTPHeaders.FromDict({"Transfer-Encoding": "gzip", "Content-Length": "42"})
	assert detect(h) is Decision.UseDecompression
	assert h.get("Transfer-Encoding") == "gzip"
	assert h.get("Content-Length") == "42"


def test_transfer_encoding_with_zero_length():
	h = HTTPHeaders.FromDict({"Transfer-Encoding": "gzip", "Content-Length": "0"})
	assert detect(h) is Decision.PassThrough
	assert h.get("Content-Length") == "0"


def test_exact_match_only():
	for value in ("x-gzip", "gzip, deflate", "GZIP", "deflate"):
		h = HTTPHeaders.FromDict({"Content-Encoding": value, "Content-Length": "3"})
		assert detect(h) is Decision.PassThrough
		assert h.get("Content-Encoding") == value
		assert h.get("Content-Length") == "3"


def test_disabled_detection_leaves_headers():
	h = HTTPHeaders.FromDict({"Content-Encoding": "gzip", "Content-Length": "10"})
	assert detect(h, False) is Decision.PassThrough
	assert h.get("Content-Encoding") == "gzip"
	assert h.get("Content-Length") == "10"


def test_no_encoding():
	h = HTTPHeaders.FromDict({"Content-Length": "10"})
	assert detect(h) is Decision.PassThrough
	assert h.get("Content-Length") == "10"


# EOF
