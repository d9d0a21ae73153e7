from sluice.utils.logging import LogLevel, LogThreshold, asLevel, formatData, logged, warning


def test_as_level():
	assert asLevel("warning") is LogLevel.Warning
	assert asLevel("Debug") is LogLevel.Debug
	assert asLevel("nope") is LogLevel.Info
	assert asLevel(None, LogLevel.Error) is LogLevel.Error


def test_threshold():
	token = LogThreshold.set(LogLevel.Error)
	try:
		assert not logged(LogLevel.Warning)
		assert logged(LogLevel.Error)
		entry = warning("Filtered out", Size=1)
		assert entry.level is LogLevel.Warning
		assert entry.context == {"Size": 1}
	finally:
		LogThreshold.reset(token)


def test_format_data():
	assert formatData(None) == "◌"
	assert formatData(True) == "✓"
	assert formatData(1.5) == "1.50"
	assert formatData("two words") == "'two words'"


# EOF
