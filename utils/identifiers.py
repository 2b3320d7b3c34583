"""
Identifier Module - Resolves path identifiers to collection entries

Entries are addressed either by their stored `id` or, for legacy entries
created before ids existed, by their position in the collection. The raw
path segment is resolved once into a typed reference.
"""

import re
from collections import namedtuple
from flask import current_app


ById = namedtuple('ById', ['value', 'index'])
ByPosition = namedtuple('ByPosition', ['position', 'index'])

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')
_MAX_POSITION_DIGITS = 18


def parse_position(raw):
    """Parse a positional identifier; None unless it is a non-negative integer"""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    digits = match.group(1)
    significant = digits.lstrip('+-').lstrip('0') or '0'
    # Longer than any list index
    if len(significant) > _MAX_POSITION_DIGITS:
        return None
    if digits.startswith('-'):
        return None if significant != '0' else 0
    return int(significant)


def _as_number(raw):
    text = str(raw).strip()
    if '_' in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _ids_match(record_id, raw, lenient):
    if record_id is None:
        return False
    if not lenient:
        return record_id == raw
    # Legacy ids stored as numbers compare numerically, so 3.0 matches '3' and '03'
    if isinstance(record_id, (int, float)) and not isinstance(record_id, bool):
        number = _as_number(raw)
        return number is not None and number == record_id
    return str(record_id) == str(raw)


def resolve_reference(records, raw, lenient=True, positional_fallback=False):
    """
    Resolve a raw identifier against a collection

    Args:
        records (list): The collection's entries
        raw: The identifier from the request path
        lenient (bool): Compare ids as strings so legacy numeric ids match
        positional_fallback (bool): When no id matches, accept an in-range
            integer as a position

    Returns:
        ById | ByPosition | None
    """
    for index, record in enumerate(records):
        if isinstance(record, dict) and _ids_match(record.get('id'), raw, lenient):
            return ById(raw, index)

    if positional_fallback:
        position = parse_position(raw)
        if position is not None and position < len(records):
            current_app.logger.warning(
                f"Entry resolved by array index {position}; legacy entry likely has no id.")
            return ByPosition(position, position)

    return None


def find_record(records, raw, **kwargs):
    """Return (index, record) for a raw identifier, or (None, None)"""
    ref = resolve_reference(records, raw, **kwargs)
    if ref is None:
        return None, None
    return ref.index, records[ref.index]


__all__ = ['ById', 'ByPosition', 'parse_position', 'resolve_reference', 'find_record']
