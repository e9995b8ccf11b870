import functools
import logging
import os
from typing import Any, Iterable, Mapping

from stackprune.config import ConfigSource, PropertiesSource, LOGGING_PROPERTIES
from stackprune.pruner import StackTracePruner, DEFAULT_KEYWORDS
from stackprune.styles import TraceStyle, style_by_name


class PruningFormatter(logging.Formatter):
    """
    Formats records like the default formatter but prunes the stack traces of their exceptions.

    The keywords, the trace style and the configuration can be passed to the constructor or set with the '.' block of a dict-config.
    """

    keywords: Iterable[str] = DEFAULT_KEYWORDS
    trace_style: TraceStyle | str = "python"
    config: ConfigSource | None = None

    def __init__(
            self,
            fmt: str | None = None,
            datefmt: str | None = None,
            style: str = "%",
            validate: bool = True,
            *,
            defaults: Mapping[str, Any] | None = None,
            keywords: Iterable[str] | None = None,
            trace_style: TraceStyle | str | None = None,
            properties: str | os.PathLike | None = None,
            bundle: str | None = LOGGING_PROPERTIES,
            config: ConfigSource | None = None
    ):
        if defaults is None:
            super().__init__(fmt, datefmt, style, validate)
        else:
            super().__init__(fmt, datefmt, style, validate, defaults=defaults)

        if keywords is not None:
            self.keywords = tuple(keywords)
        if trace_style is not None:
            self.trace_style = style_by_name(trace_style)

        if config is not None:
            self.config = config
        elif properties is not None:
            self.config = PropertiesSource(properties)
        elif bundle is not None:
            self.config = PropertiesSource.bundle(bundle)

    @functools.cached_property
    def pruner(self) -> StackTracePruner:
        return StackTracePruner(keywords=self.keywords, style=self.trace_style, config=self.config)

    def formatException(self, ei) -> str:
        return "\n".join(self.pruner.render(ei))
