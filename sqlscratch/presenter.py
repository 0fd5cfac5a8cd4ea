"""Prepare interpreter output for the result pane."""

# Result pane never takes more lines than this, however tall the window
MAX_RESULT_LINES = 60


def trim_trailing_blank_lines(text: str) -> str:
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def count_lines(text: str) -> int:
    return len(text.splitlines()) if text else 0


def fit_height(line_count: int, current_height: int, max_height: int = MAX_RESULT_LINES) -> int:
    """Display height in lines for content of ``line_count`` lines.

    Shrinks to the content when it is shorter than the current area and
    never grows past the current area or ``max_height``.
    """
    height = min(line_count, current_height, max_height)
    return max(height, 1)
