import logging
from typing import NamedTuple, Tuple

from readme_activity.exceptions import MarkerNotFoundError

logger = logging.getLogger(__name__)

START_MARKER = '<!--START_SECTION:activity-->'
END_MARKER = '<!--END_SECTION:activity-->'


class PatchResult(NamedTuple):
    lines: Tuple[str, ...]
    changed: bool


def number_lines(lines):
    return [f'{idx}. {line}' for idx, line in enumerate(lines, start=1)]


def find_marker(lines, marker, start=0):
    for idx in range(start, len(lines)):
        if lines[idx].strip() == marker:
            return idx
    return -1


def _line_ending(line):
    return '\r' if line.endswith('\r') else ''


def _overwrite(region, numbered):
    """Rewrite the non-blank lines of ``region`` in order, keeping blank ones.

    The region keeps its length: surplus new lines are dropped and surplus
    old lines are left as they are. Each rewritten line keeps its old line
    ending.
    """
    updated = list(region)
    slots = [idx for idx, line in enumerate(region) if line.strip()]
    for idx, line in zip(slots, numbered):
        updated[idx] = line + _line_ending(region[idx])

    if len(numbered) > len(slots):
        logger.warning(
            'Activity section only has room for %d of %d lines; remove the end marker to regenerate it.',
            len(slots), len(numbered))
    elif len(slots) > len(numbered):
        logger.warning('Activity section keeps %d stale line(s) from a previous run.',
                       len(slots) - len(numbered))
    return updated


def patch(document_lines, new_lines, start_marker=START_MARKER, end_marker=END_MARKER):
    """Place ``new_lines`` between the activity markers of a document.

    Returns a :class:`PatchResult` holding the new document lines and whether
    they differ from the input. Raises :class:`MarkerNotFoundError` when the
    start marker is missing. ``document_lines`` is never modified.
    """
    document = tuple(document_lines)
    start_idx = find_marker(document, start_marker)
    if start_idx == -1:
        raise MarkerNotFoundError(start_marker)

    if not new_lines:
        return PatchResult(document, False)

    numbered = number_lines(new_lines)
    before = document[:start_idx + 1]
    eol = _line_ending(document[start_idx])
    end_idx = find_marker(document, end_marker, start_idx + 1)

    if end_idx == -1:
        inserted = tuple(line + eol for line in numbered) + (end_marker + eol,)
        lines = before + inserted + document[start_idx + 1:]
        return PatchResult(lines, True)

    region = document[start_idx + 1:end_idx]
    after = document[end_idx:]
    if '\n'.join(line.rstrip('\r') for line in region).strip() == '\n'.join(numbered).strip():
        return PatchResult(document, False)

    if not any(line.strip() for line in region):
        # nothing to overwrite yet, keep any formatter blank lines in front
        new_region = list(region) + [line + eol for line in numbered]
    else:
        new_region = _overwrite(region, numbered)

    lines = before + tuple(new_region) + after
    return PatchResult(lines, lines != document)


def read_document(path):
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read().split('\n')


def write_document(path, lines):
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write('\n'.join(lines))
