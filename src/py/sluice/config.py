from os import getenv

DEFAULT_ENCODING: str = "utf8"

# Tells if responses labelled as gzip are decompressed by default. Callers
# can still opt out per response.
GZIP: bool = getenv("SLUICE_GZIP", "1") == "1"

# The maximum size of a decoded chunk produced by the decompressor.
CHUNK_SIZE: int = int(getenv("SLUICE_CHUNK_SIZE", 64 * 1024))

# One of the `LogLevel` names (Debug, Info, Warning, Error, ...)
LOG_LEVEL: str = getenv("SLUICE_LOG_LEVEL", "Info")

# EOF
