"""Delimited text rendering and merging of same-schema CSV files.

Cells are quoted only when they contain a double quote or the delimiter.
Merging keeps a single header line and appends body rows in source order.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from common.errors import EmptySourceList, HeaderMismatch

logger = logging.getLogger(__name__)


def escape_cell(value: str, delimiter: str) -> str:
    if '"' in value or delimiter in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def header_cell(name: str) -> str:
    """``main_success_runs`` -> ``main success runs``."""
    return name.replace('_', ' ')


def render(
    rows: Iterable[Sequence],
    delimiter: str = ';',
    escape: bool = True,
) -> str:
    """Render rows of scalar cells, one line per row, trailing newline.

    With ``escape=False`` cells are written verbatim; use it only for
    cells already known to be safe for the delimiter.
    """
    lines = []
    for row in rows:
        cells = ['' if cell is None else str(cell) for cell in row]
        if escape:
            cells = [escape_cell(cell, delimiter) for cell in cells]
        lines.append(delimiter.join(cells))
    return '\n'.join(lines) + '\n'


def write_csv(
    path: Path,
    headers: Sequence[str],
    rows: Iterable[Sequence],
    delimiter: str = ';',
    escape: bool = True,
) -> Path:
    """Write header + rows as UTF-8, creating the parent directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    header_row = [header_cell(h) for h in headers]
    path.write_text(render([header_row, *rows], delimiter, escape), encoding='utf-8')
    return path


def split_csv(text: str) -> Tuple[str, List[str]]:
    """Header line and non-empty body lines."""
    lines = text.split('\n')
    header, body = lines[0], lines[1:]
    return header, [line for line in body if line.strip()]


def merge(target: Path, sources: Sequence[Path]) -> Path:
    """Merge CSV files sharing one header line into target.

    Every source is read and checked before the target is written, so a
    header mismatch leaves the target as it was.
    """
    if not sources:
        raise EmptySourceList()

    target = Path(target)
    first = Path(sources[0])
    first_text = first.read_text(encoding='utf-8')
    header, body = split_csv(first_text)

    appended = []
    for source in sources[1:]:
        source_header, source_body = split_csv(Path(source).read_text(encoding='utf-8'))
        if source_header != header:
            raise HeaderMismatch(source, header, source_header)
        if not source_body:
            logger.debug(f"{source} has no rows, skip")
            continue
        appended.extend(source_body)

    target.parent.mkdir(parents=True, exist_ok=True)
    if not appended:
        # Single source (or only header-only extras): copy verbatim
        target.write_text(first_text, encoding='utf-8')
    else:
        target.write_text('\n'.join([header, *body, *appended]) + '\n', encoding='utf-8')

    logger.info(f"Merged {len(sources)} files into {target} ({len(body) + len(appended)} rows)")
    return target
