import json
import logging
from datetime import datetime, timezone
from importlib import import_module
from typing import Any

from stackprune.tools import JSONMultiEncoder
from .text_formatter import PruningFormatter

EXCEPTION_KEY = "$exception"


class JSONFormatter(PruningFormatter):
    """Formats each record as a single JSON object. The exception is logged as a list of pruned lines."""

    json_encoder_cls: type[json.JSONEncoder] | str = JSONMultiEncoder

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "exception": None,
        }

        if record.__dict__.get(EXCEPTION_KEY) is not None:
            # The lines were already pruned by the ExceptionLinesField filter.
            entry["exception"] = record.__dict__[EXCEPTION_KEY]
        elif record.exc_info:
            entry["exception"] = self.pruner.render(record.exc_info)

        # A dict-config can only name the encoder, e.g. "stackprune.tools.JSONMultiEncoder"; resolve it once.
        if isinstance(self.json_encoder_cls, str):
            *module, cls = self.json_encoder_cls.split(".")
            self.json_encoder_cls = getattr(import_module(".".join(module)), cls)

        return json.dumps(entry, sort_keys=False, allow_nan=False, cls=self.json_encoder_cls)
