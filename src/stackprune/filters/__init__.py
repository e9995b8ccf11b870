from .prune_exc_text import PruneExcText
from .exception_lines import ExceptionLinesField
