import logging
import os
from typing import Iterable

from stackprune.config import ConfigSource, LOGGING_PROPERTIES
from stackprune.pruner import StackTracePruner
from stackprune.styles import TraceStyle


class PruneExcText(logging.Filter):
    """Renders the pruned stack trace into exc_text so that any formatter down the line logs it instead of the full one."""

    def __init__(
            self,
            keywords: Iterable[str] | None = None,
            trace_style: TraceStyle | str = "python",
            properties: str | os.PathLike | None = None,
            bundle: str | None = LOGGING_PROPERTIES,
            config: ConfigSource | None = None
    ):
        super().__init__("exc_text")
        self.pruner = StackTracePruner.from_options(keywords, trace_style, properties, bundle, config)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.exc_info and not record.exc_text:
            record.exc_text = "\n".join(self.pruner.render(record.exc_info))
        return True
