from typing import Iterable, Iterator, Mapping

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	if name in headers:
		return headers[name]
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


# -----------------------------------------------------------------------------
#
# HEADERS
#
# -----------------------------------------------------------------------------


class HTTPHeaders:
	"""An ordered multimap of response headers. Names are looked up without
	regard to case, and a name may appear more than once."""

	__slots__ = ["entries"]

	@staticmethod
	def FromPairs(pairs: Iterable[tuple[str, str]]) -> "HTTPHeaders":
		res = HTTPHeaders()
		for k, v in pairs:
			res.add(k, v)
		return res

	@staticmethod
	def FromDict(values: Mapping[str, str | list[str]]) -> "HTTPHeaders":
		res = HTTPHeaders()
		for k, v in values.items():
			for _ in [v] if isinstance(v, str) else v:
				res.add(k, _)
		return res

	def __init__(self) -> None:
		self.entries: list[tuple[str, str]] = []

	def add(self, name: str, value: str | int) -> "HTTPHeaders":
		"""Adds a value for the given header, after existing ones."""
		self.entries.append((headername(name), str(value)))
		return self

	def set(self, name: str, value: str | int) -> "HTTPHeaders":
		"""Replaces all the values of the given header."""
		self.remove(name)
		return self.add(name, value)

	def get(self, name: str, default: str | None = None) -> str | None:
		"""Returns the first value for the given header."""
		n = headername(name)
		for k, v in self.entries:
			if k == n:
				return v
		return default

	def getAll(self, name: str) -> list[str]:
		"""Returns all the values for the given header, in order."""
		n = headername(name)
		return [v for k, v in self.entries if k == n]

	def has(self, name: str) -> bool:
		n = headername(name)
		return any(k == n for k, _ in self.entries)

	def remove(self, name: str) -> int:
		"""Removes every entry for the given header, returning how many
		were removed."""
		n = headername(name)
		count = len(self.entries)
		self.entries = [_ for _ in self.entries if _[0] != n]
		return count - len(self.entries)

	def items(self) -> list[tuple[str, str]]:
		return list(self.entries)

	@property
	def contentLength(self) -> int | None:
		v = self.get("Content-Length")
		try:
			return None if v is None else int(v)
		except ValueError:
			return None

	@property
	def contentType(self) -> str | None:
		return self.get("Content-Type")

	def __contains__(self, name: object) -> bool:
		return isinstance(name, str) and self.has(name)

	def __getitem__(self, name: str) -> str:
		v = self.get(name)
		if v is None:
			raise KeyError(name)
		return v

	def __iter__(self) -> Iterator[tuple[str, str]]:
		return iter(self.entries)

	def __len__(self) -> int:
		return len(self.entries)

	def __str__(self) -> str:
		return f"HTTPHeaders({', '.join(f'{k}: {v}' for k, v in self.entries)})"


# EOF
