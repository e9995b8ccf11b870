import logging
import os
from typing import Iterable

from stackprune.config import ConfigSource, LOGGING_PROPERTIES
from stackprune.pruner import StackTracePruner
from stackprune.styles import TraceStyle


class ExceptionLinesField(logging.Filter):

    def __init__(
            self,
            keywords: Iterable[str] | None = None,
            trace_style: TraceStyle | str = "python",
            properties: str | os.PathLike | None = None,
            bundle: str | None = LOGGING_PROPERTIES,
            config: ConfigSource | None = None
    ):
        super().__init__()
        self.pruner = StackTracePruner.from_options(keywords, trace_style, properties, bundle, config)

    def filter(self, record: logging.LogRecord) -> bool:
        # A list of lines rather than a single string so that structured formatters log an array.
        record.__dict__["$exception"] = self.pruner.render(record.exc_info) if record.exc_info else None
        return True
