import logging
import os
import traceback
from types import TracebackType
from typing import Iterable, Optional, Type, TypeAlias

from .config import ConfigSource, PropertiesSource, LOGGING_PROPERTIES, pruning_enabled
from .styles import TraceStyle, PYTHON, style_by_name

DELPHIX = "com.delphix"
PROXY = "$Proxy"

DEFAULT_KEYWORDS: tuple[str, ...] = (DELPHIX, PROXY)

ExcInfo: TypeAlias = tuple[Optional[Type[BaseException]], Optional[BaseException], Optional[TracebackType]]

_logger = logging.getLogger(__name__)


class StackTracePruner:
    """
    Prunes extraneous frames from rendered stack traces so that only the frames useful for debugging are logged.

    Frames containing one of the allowed keywords are always kept. Under each header the frames leading up to the first
    allowed frame are kept too so the third-party calls into the application remain visible. After that every run of
    other frames is collapsed into a single '... N more' line.
    """

    def __init__(
            self,
            keywords: Iterable[str] = DEFAULT_KEYWORDS,
            style: TraceStyle | str = PYTHON,
            config: ConfigSource | None = None
    ):
        self.keywords = tuple(keywords)
        self.style = style_by_name(style)
        self.config = config

    @classmethod
    def from_options(
            cls,
            keywords: Iterable[str] | None = None,
            trace_style: TraceStyle | str = PYTHON,
            properties: str | os.PathLike | None = None,
            bundle: str | None = LOGGING_PROPERTIES,
            config: ConfigSource | None = None
    ) -> "StackTracePruner":
        """Creates a pruner from the options a dict-config passes to filters and formatters."""
        if config is None:
            if properties is not None:
                config = PropertiesSource(properties)
            elif bundle is not None:
                config = PropertiesSource.bundle(bundle)
        return cls(
            keywords=DEFAULT_KEYWORDS if keywords is None else keywords,
            style=trace_style,
            config=config
        )

    def is_allowed(self, line: str) -> bool:
        return any(keyword in line for keyword in self.keywords)

    def render(self, exc: BaseException | ExcInfo) -> list[str]:
        """Renders the exception with its whole chain like the interpreter would and prunes the result."""
        lines: list[str] = []
        try:
            self._collect(_format_exception(exc).splitlines(), lines)
        except Exception as e:
            _logger.debug(f"Cannot render <{_exc_name(exc)}>: {e!r}")
            lines.append(_describe(e))
        return lines

    def prune_text(self, text: str) -> list[str]:
        """Prunes a trace that has already been rendered, e.g. one forwarded from another process."""
        lines: list[str] = []
        try:
            self._collect(text.splitlines(), lines)
        except Exception as e:
            _logger.debug(f"Cannot prune trace: {e!r}")
            lines.append(_describe(e))
        return lines

    def prune(self, lines: Iterable[str]) -> list[str]:
        output: list[str] = []
        self._prune_into(lines, output)
        return output

    def _collect(self, lines: list[str], output: list[str]) -> None:
        if pruning_enabled(self.config):
            self._prune_into(lines, output)
        else:
            output.extend(lines)

    def _prune_into(self, lines: Iterable[str], output: list[str]) -> None:
        # Pruning starts only after the first allowed frame under each header so that the
        # third-party frames leading up to the application code are still visible.
        preserve_frames = True
        frames_omitted = 0
        # The last frame's depth and fate decide the fate of its continuation lines; None means no frame yet.
        frame_depth: int | None = None
        frame_kept = False

        for line in lines:
            depth = self.style.frame_depth(line)
            if depth is None:
                if frame_depth is not None and self.style.is_continuation(line, frame_depth):
                    if frame_kept:
                        output.append(line)
                    continue

                preserve_frames = True
                frames_omitted = 0
                frame_depth = None
                output.append(line)
                continue

            frame_depth = depth
            if self.is_allowed(line):
                preserve_frames = False
                frame_kept = True
            else:
                frame_kept = preserve_frames

            if frame_kept:
                frames_omitted = 0
                output.append(line)
            else:
                frames_omitted += 1
                # The summary of the current run is always the last line.
                if frames_omitted > 1:
                    output.pop()
                output.append(self.style.summary(frames_omitted, line))


def _exc_name(exc: BaseException | ExcInfo) -> str:
    if isinstance(exc, BaseException):
        return type(exc).__name__
    exc_cls = exc[0] if isinstance(exc, tuple) and exc else None
    return exc_cls.__name__ if isinstance(exc_cls, type) else type(exc).__name__


def _format_exception(exc: BaseException | ExcInfo) -> str:
    if isinstance(exc, BaseException):
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    exc_cls, exc_value, exc_tb = exc
    return "".join(traceback.format_exception(exc_cls, exc_value, exc_tb))


def _describe(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"
