"""Named-option binding onto typed trial configurations.

Options are addressed with dotted keys, ``<section>.<field>``, where the
section is one of the :class:`TrialConfig` fields (``settings``, ``voxel``,
``task``). Binding never mutates: it returns a new, re-validated
``TrialConfig``.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any

from voxel_episodes.config.types import SpringScaffolding, TrialConfig

_SCAFFOLDING_SEPARATORS = ("+", "|")


class ConfigBindingError(ValueError):
    """An option key or value could not be bound onto a configuration."""


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ConfigBindingError(f"{key} must be a boolean value, got {raw!r}")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ConfigBindingError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ConfigBindingError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ConfigBindingError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ConfigBindingError(f"{key} must be an integer value, got {raw!r}")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ConfigBindingError(f"{key} must be a float value")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError as exc:
            raise ConfigBindingError(f"{key} must be a float value, got {raw!r}") from exc
    raise ConfigBindingError(f"{key} must be a float value, got {raw!r}")


def _parse_scaffolding(raw: object, key: str) -> SpringScaffolding:
    if isinstance(raw, SpringScaffolding):
        return raw
    if isinstance(raw, str):
        token = raw.strip()
        try:
            return SpringScaffolding[token.upper()]
        except KeyError:
            pass
        try:
            return SpringScaffolding(token.lower())
        except ValueError as exc:
            valid = ", ".join(s.name for s in SpringScaffolding)
            raise ConfigBindingError(f"{key} entries must be one of {valid}") from exc
    raise ConfigBindingError(f"{key} entries must be scaffolding names, got {raw!r}")


def _coerce_scaffoldings(raw: object, key: str) -> frozenset[SpringScaffolding]:
    """Coerce an iterable of names/members, or a ``+``-joined string, to a frozenset."""
    if isinstance(raw, SpringScaffolding):
        return frozenset({raw})
    if isinstance(raw, str):
        text = raw
        for separator in _SCAFFOLDING_SEPARATORS:
            text = text.replace(separator, ",")
        items: list[object] = [part for part in text.split(",") if part.strip()]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = list(raw)
    else:
        raise ConfigBindingError(f"{key} must be a set of scaffoldings, got {raw!r}")
    return frozenset(_parse_scaffolding(item, key) for item in items)


def _coerce(raw: object, hint: Any, key: str) -> object:
    if hint is bool:
        return _coerce_bool(raw, key)
    if hint is int:
        return _coerce_int(raw, key)
    if hint is float:
        return _coerce_float(raw, key)
    if typing.get_origin(hint) is frozenset:
        (item_type,) = typing.get_args(hint)
        if item_type is SpringScaffolding:
            return _coerce_scaffoldings(raw, key)
    raise ConfigBindingError(f"{key} cannot be bound from a plain value")


def split_key(key: str) -> tuple[str, str]:
    """Split ``section.field`` into its two parts."""
    parts = key.split(".")
    if len(parts) != 2 or not all(parts):
        raise ConfigBindingError(f"option key must look like 'section.field', got {key!r}")
    return parts[0], parts[1]


def bind_option(config: TrialConfig, key: str, value: object) -> TrialConfig:
    """Return a copy of *config* with option *key* set to *value*.

    Raises :exc:`ConfigBindingError` for unknown sections or fields,
    incompatible value types, and values rejected by the target's validation.
    """
    section_name, field_name = split_key(key)
    section_names = {f.name for f in dataclasses.fields(config)}
    if section_name not in section_names:
        raise ConfigBindingError(
            f"unknown section {section_name!r}; expected one of {sorted(section_names)}"
        )
    section = getattr(config, section_name)
    hints = typing.get_type_hints(type(section))
    field_names = {f.name for f in dataclasses.fields(section)}
    if field_name not in field_names:
        raise ConfigBindingError(
            f"{type(section).__name__} has no field {field_name!r} (key {key!r})"
        )
    coerced = _coerce(value, hints[field_name], key)
    try:
        new_section = dataclasses.replace(section, **{field_name: coerced})
    except ValueError as exc:
        raise ConfigBindingError(f"{key}={value!r} rejected: {exc}") from exc
    return dataclasses.replace(config, **{section_name: new_section})
