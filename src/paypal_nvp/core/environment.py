"""
Resolution of the ``PAYPAL_*`` settings from the process environment.

Values come from three layers: ``os.environ`` (or an explicit base mapping),
an optional ``.env`` file that only fills gaps, and overrides that always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

SETTINGS_PREFIX = "PAYPAL_"

__all__ = [
    "GatewayEnvironment",
    "build_environment",
    "load_env_file",
]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the settings found in ``path`` into ``environ`` without replacing
    keys that are already set, and return the merged mapping.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class GatewayEnvironment:
    """
    Settings resolved for one gateway client.

    ``sources`` records which layer (``environ``, ``file`` or ``override``)
    supplied each key, so configuration problems can be traced without
    echoing secret values.
    """

    variables: Mapping[str, str]
    sources: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    prefix: Optional[str] = SETTINGS_PREFIX,
) -> GatewayEnvironment:
    """
    Merge ``base`` (default :data:`os.environ`), ``env_file`` and ``overrides``.

    Only keys starting with ``prefix`` are kept; pass ``prefix=None`` to keep
    everything. Pass ``env_file=None`` to skip reading a file.
    """
    file_values = _parse_env_file(Path(env_file)) if env_file is not None else {}
    layers = (
        ("environ", os.environ if base is None else base, False),
        ("file", file_values, False),
        ("override", overrides or {}, True),
    )

    variables: Dict[str, str] = {}
    sources: Dict[str, str] = {}
    for source, values, replace in layers:
        for key, value in values.items():
            if prefix is not None and not key.startswith(prefix):
                continue
            if key in variables and not replace:
                continue
            variables[key] = value
            sources[key] = source

    return GatewayEnvironment(variables=variables, sources=sources)
