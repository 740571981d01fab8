"""
Step merging - rebuild logical steps from OCR-wrapped lines.

Rules:
- A numbered line ("1." / "1)") always starts a new step
- Inside a numbered step, lines are merged even across sentence ends,
  until the next numbered line comes up
- Outside numbered steps, a sentence end (. ! ?) closes the step
- Anything else is a continuation of the current step

Example:
    1. Den Backofen auf 180°C
    Ober-/Unterhitze vorheizen.
    Ein Backblech mit
    Backpapier auslegen.
    2. In einer Schüssel Mehl
    und Zucker vermischen

    -> ["Den Backofen auf 180°C Ober-/Unterhitze vorheizen. Ein Backblech mit Backpapier auslegen.",
        "In einer Schüssel Mehl und Zucker vermischen"]
"""

import re
from collections.abc import Sequence

from .normalizer import strip_list_marker

_NUMBERED_LINE = re.compile(r"^\d+[.)]\s")
_SENTENCE_END = re.compile(r"[.!?]\s*$")


def parse_step_line(line: str) -> str | None:
    """Strip list/number markers from a step line; None if nothing remains."""
    cleaned = strip_list_marker(line)
    return cleaned or None


def starts_with_number(line: str) -> bool:
    return bool(_NUMBERED_LINE.match(line))


def merge_step_lines(raw_lines: Sequence[str]) -> list[str]:
    """Merge raw step lines into one string per logical step."""
    if not raw_lines:
        return []

    steps: list[str] = []
    current_step = ""
    in_numbered_step = False

    for i, line in enumerate(raw_lines):
        cleaned = parse_step_line(line)
        if not cleaned:
            continue

        numbered = starts_with_number(line)
        ends_sentence = bool(current_step) and bool(_SENTENCE_END.search(current_step))
        next_numbered = i + 1 < len(raw_lines) and starts_with_number(raw_lines[i + 1])

        if (
            not current_step
            or numbered
            or (ends_sentence and (not in_numbered_step or next_numbered))
        ):
            if current_step:
                steps.append(current_step.strip())
            current_step = cleaned
            in_numbered_step = numbered
        else:
            current_step += " " + cleaned

    if current_step:
        steps.append(current_step.strip())

    return steps
