import logging
import os
import pathlib
import sys
from typing import Protocol, Optional, Mapping, Iterable

LOGGING_PROPERTIES = "logging"
PRUNING_ENABLED_KEY = "stacktrace.pruning.enabled"

_logger = logging.getLogger(__name__)
_polarity_flagged = False


class ConfigSource(Protocol):
    """Represents a key-value source of configuration."""

    def get(self, key: str) -> Optional[str]: ...


class MappingSource(ConfigSource):

    def __init__(self, mapping: Mapping[str, str]):
        self.mapping = mapping

    def get(self, key: str) -> Optional[str]:
        value = self.mapping.get(key)
        return None if value is None else str(value)


class EnvironSource(ConfigSource):
    """Maps keys like 'stacktrace.pruning.enabled' to environment variables like 'STACKTRACE_PRUNING_ENABLED'."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def variable(self, key: str) -> str:
        return self.prefix + key.upper().replace(".", "_")

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(self.variable(key))


class ChainSource(ConfigSource):

    def __init__(self, *sources: ConfigSource):
        self.sources = sources

    def get(self, key: str) -> Optional[str]:
        for source in self.sources:
            value = source.get(key)
            if value is not None:
                return value
        return None


class PropertiesSource(ConfigSource):
    """
    Reads a Java-style .properties file.

    The file is parsed on the first lookup and cached. A missing file behaves like an empty one.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = pathlib.Path(path)
        self._properties: dict[str, str] | None = None

    @classmethod
    def bundle(cls, name: str = LOGGING_PROPERTIES, search_path: Iterable[str | os.PathLike] | None = None) -> Optional["PropertiesSource"]:
        """Finds the <name>.properties bundle in the first directory that has it."""
        if search_path is None:
            search_path = [os.getcwd(), *sys.path]
        for directory in search_path:
            path = pathlib.Path(directory or os.curdir) / f"{name}.properties"
            if path.is_file():
                return cls(path)
        return None

    @property
    def properties(self) -> dict[str, str]:
        if self._properties is None:
            if self.path.is_file():
                self._properties = parse_properties(self.path.read_text(encoding="utf-8"))
            else:
                self._properties = {}
        return self._properties

    def get(self, key: str) -> Optional[str]:
        return self.properties.get(key)


def parse_properties(text: str) -> dict[str, str]:
    properties: dict[str, str] = {}
    lines = iter(text.splitlines())
    for line in lines:
        line = line.lstrip()
        if not line or line[0] in "#!":
            continue

        # A trailing backslash continues the logical line.
        while _continues(line):
            line = line[:-1] + next(lines, "").lstrip()

        key, value = _split_property(line)
        properties[key] = value
    return properties


def _continues(line: str) -> bool:
    # An odd number of trailing backslashes means the last one is not escaped.
    return (len(line) - len(line.rstrip("\\"))) % 2 == 1


def _split_property(line: str) -> tuple[str, str]:
    escaped = False
    for i, c in enumerate(line):
        if escaped:
            escaped = False
            continue
        if c == "\\":
            escaped = True
            continue
        if c in "=:" or c.isspace():
            key = line[:i]
            rest = line[i:].lstrip()
            if rest[:1] in ("=", ":"):
                rest = rest[1:].lstrip()
            return _unescape(key), _unescape(rest)
    return _unescape(line), ""


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(value: str) -> str:
    result = []
    chars = iter(value)
    for c in chars:
        if c == "\\":
            c = next(chars, "\\")
            c = _ESCAPES.get(c, c)
        result.append(c)
    return "".join(result)


def pruning_enabled(source: ConfigSource | None) -> bool:
    """
    Tells whether stack traces should be pruned.

    A missing source, a missing key or any value but 'true' means pruning is enabled.
    The value 'true' disables pruning. The key's name does not match this polarity so it is reported to the operators.
    """
    global _polarity_flagged

    if source is None:
        return True

    try:
        value = source.get(PRUNING_ENABLED_KEY)
    except Exception as e:
        _logger.warning(f"Cannot read <{PRUNING_ENABLED_KEY}> from <{type(source).__name__}>. Pruning stays enabled: {e!r}")
        return True

    if value != "true":
        return True

    if not _polarity_flagged:
        _polarity_flagged = True
        _logger.warning(
            f"Stack trace pruning is disabled because <{PRUNING_ENABLED_KEY}> is <true>. "
            f"This key disables pruning when it is true despite its name."
        )
    return False
