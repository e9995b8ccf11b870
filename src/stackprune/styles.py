import dataclasses
import re

# The '  | ' and '  +-+' borders drawn around the members of an exception group.
_GROUP_BORDER = re.compile(r"^(?:\s*[|+])*")


@dataclasses.dataclass(frozen=True)
class TraceStyle:
    """
    Describes how frames are laid out in a rendered trace.

    Without a frame marker every line starting with the indent is a frame. With a frame marker only the lines whose
    content starts with it are frames; exception-group borders are skipped first so that nested headers stay headers.
    """

    name: str
    indent: str
    frame_marker: str | None = None
    group_continuations: bool = False

    def __post_init__(self):
        if not self.indent:
            raise ValueError(f"Trace style <{self.name}> requires a non-empty indent.")

    @property
    def ellipsis(self) -> str:
        return f"{self.indent}..."

    def _split(self, line: str) -> tuple[str, str]:
        """Splits the line into its prefix (borders and indentation) and its content."""
        border = _GROUP_BORDER.match(line).end() if self.frame_marker else 0
        content = line[border:].lstrip()
        return line[:len(line) - len(content)], content

    def frame_depth(self, line: str) -> int | None:
        """Returns the indentation of a frame line or None when the line is not a frame."""
        if self.frame_marker is None:
            return len(self.indent) if line.startswith(self.indent) else None
        prefix, content = self._split(line)
        return len(prefix) if content.startswith(self.frame_marker) else None

    def is_frame(self, line: str) -> bool:
        return self.frame_depth(line) is not None

    def is_continuation(self, line: str, frame_depth: int) -> bool:
        """Tells whether the line belongs to the frame with the given depth, e.g. its source or caret line."""
        if not self.group_continuations:
            return False
        prefix, content = self._split(line)
        return bool(content) and len(prefix) >= frame_depth

    def summary(self, frames_omitted: int, frame: str | None = None) -> str:
        if frame is None or self.frame_marker is None:
            return f"{self.ellipsis} {frames_omitted} more"
        prefix, _ = self._split(frame)
        return f"{prefix}... {frames_omitted} more"


JAVA = TraceStyle(name="java", indent="\t")
PYTHON = TraceStyle(name="python", indent="  ", frame_marker='File "', group_continuations=True)

_STYLES = {s.name: s for s in (JAVA, PYTHON)}


def style_by_name(name: str | TraceStyle) -> TraceStyle:
    if isinstance(name, TraceStyle):
        return name
    try:
        return _STYLES[name.casefold().strip()]
    except KeyError as e:
        raise ValueError(
            f"Cannot use trace style <{name}>. "
            f"It must be one of: {sorted(_STYLES)}."
        ) from e
