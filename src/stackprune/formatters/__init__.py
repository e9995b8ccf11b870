from .text_formatter import PruningFormatter
from .json_formatter import JSONFormatter
