from __future__ import annotations
"""Coercion of raw request strings into declared parameter types.

Invalid input produces a 400 through ``flask.abort`` so that the app error
handler renders it with the standard JSON error shape.
"""
import math
from typing import Any, Dict, List, Optional
from flask import abort

_TRUE = {'true', '1', 'yes', 'on'}
_FALSE = {'false', '0', 'no', 'off'}


def _coerce_scalar(raw: str, type_name: str) -> Any:
    if type_name == 'integer':
        return int(raw)
    if type_name == 'number':
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError(f'not a finite number: {raw!r}')
        return value
    if type_name == 'boolean':
        val = raw.strip().lower()
        if val in _TRUE:
            return True
        if val in _FALSE:
            return False
        raise ValueError(f'not a boolean: {raw!r}')
    return raw


def coerce_value(raw: Any, schema: Optional[Dict[str, Any]], field_name: str) -> Any:
    """Coerce raw (a string, or a list of strings for arrays) per schema.

    Returns the converted value or aborts with 400.
    """
    schema = schema or {}
    type_name = schema.get('type', 'string')
    try:
        if type_name == 'array':
            items = raw if isinstance(raw, list) else [raw]
            item_type = (schema.get('items') or {}).get('type', 'string')
            value: Any = [_coerce_scalar(i, item_type) for i in items]
        else:
            value = _coerce_scalar(raw, type_name)
    except (TypeError, ValueError):
        abort(400, description=f'{field_name} invalid')
    enum: Optional[List[Any]] = schema.get('enum')
    if enum is not None:
        values = value if isinstance(value, list) else [value]
        if any(v not in enum for v in values):
            abort(400, description=f'{field_name} invalid')
    return value


__all__ = ['coerce_value']
