"""Placeholder substitution shared by all text appenders.

Tokens: ``%d`` date, ``%l`` level, ``%c`` content, ``%C`` context.
"""

from __future__ import annotations

import re
from datetime import datetime

from .models import Log

DEFAULT_FORMAT = "[%d]\t[%l](%C)\t-\t%c"
DEFAULT_EVENT_FORMAT = "[%l](%C)\t-\t%c"

# Invariant-culture rendering: MM/dd/yyyy HH:mm:ss
INVARIANT_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"

_TOKEN_RE = re.compile(r"%[dlcC]")


def format_date(value: datetime) -> str:
    return value.strftime(INVARIANT_DATE_FORMAT)


def format_log(
    template: str,
    log: Log,
    *,
    append_date: bool = True,
    append_level: bool = True,
    append_context: bool = True,
    append_content: bool = True,
) -> str:
    """Render a log entry through a placeholder template.

    Disabled fields are blanked out of the template before any substitution,
    so they contribute an empty string rather than their placeholder text.
    Substitution is a single pass: tokens inside the substituted values are
    left as they are.
    """
    output = template
    if not append_date:
        output = output.replace("%d", "")
    if not append_level:
        output = output.replace("%l", "")
    if not append_content:
        output = output.replace("%c", "")
    if not append_context:
        output = output.replace("%C", "")

    values = {
        "%d": format_date(log.log_date),
        "%l": log.level.value,
        "%c": log.content,
        "%C": log.context or "",
    }
    return _TOKEN_RE.sub(lambda m: values[m.group(0)], output)
