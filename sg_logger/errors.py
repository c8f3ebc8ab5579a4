"""Turn exceptions into serializable attribute trees."""
from __future__ import annotations

import re
import traceback
from typing import Any, Dict, Optional

# Python traceback frames, outermost first.
PY_FRAME_RE = re.compile(r'^\s*File "(?P<file>[^"]+)", line (?P<line>\d+)')
# "at fn (file:line:column)" frames, innermost first.
PAREN_FRAME_RE = re.compile(r"\((?P<file>[^)]*?):(?P<line>\d+?):(?P<column>\d+?)\)\\?$")


def is_error(value: Any) -> bool:
    return isinstance(value, BaseException)


def format_stack(error: BaseException) -> str:
    lines = traceback.format_exception(type(error), error, error.__traceback__, chain=False)
    return "".join(lines).rstrip("\n")


def get_code_location(stack: Optional[str]) -> str:
    """Return ``"<file>:<line>"`` of the frame that raised, or ``""``."""
    if not stack:
        return ""

    innermost_py = None
    for item in stack.splitlines():
        match = PY_FRAME_RE.match(item)
        if match:
            innermost_py = match
            continue
        if innermost_py is None:
            match = PAREN_FRAME_RE.search(item.rstrip())
            if match:
                return f"{match.group('file')}:{int(match.group('line'))}"

    if innermost_py is not None:
        return f"{innermost_py.group('file')}:{int(innermost_py.group('line'))}"
    return ""


def get_cause(error: BaseException) -> Any:
    if error.__cause__ is not None:
        return error.__cause__
    return getattr(error, "cause", None)


def format_error(error: BaseException) -> Dict[str, Any]:
    stack = format_stack(error)
    cause = get_cause(error)
    return {
        "name": type(error).__name__,
        "location": get_code_location(stack),
        "message": str(error),
        "stack": stack,
        "cause": format_error(cause) if is_error(cause) else cause,
    }
