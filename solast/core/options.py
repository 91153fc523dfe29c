# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Per-parse configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Union

# camelCase spellings accepted alongside the attribute names.
_ALIASES = {
	"includeRanges": "include_ranges",
	"maxErrors": "max_errors",
}


@dataclass(frozen=True)
class ParseOptions:
	"""
	Options for a single parse.

	- `tolerant`: record errors and keep going instead of raising.
	- `include_ranges`: attach a Range to every AST node.
	- `max_errors`: recoveries the tolerant engine attempts before it gives
	  up on the rest of the input.
	"""

	tolerant: bool = False
	include_ranges: bool = True
	max_errors: int = 100

	def __post_init__(self) -> None:
		if self.max_errors < 1:
			raise ValueError(f"max_errors must be positive, got {self.max_errors}")

	@classmethod
	def from_mapping(cls, mapping: Mapping[str, Any]) -> "ParseOptions":
		return cls(**_normalize(mapping))

	@classmethod
	def coerce(
		cls,
		options: Union["ParseOptions", Mapping[str, Any], None] = None,
		**overrides: Any,
	) -> "ParseOptions":
		"""Normalize `options` (instance, mapping or None) and apply keyword overrides."""
		if options is None:
			base = cls()
		elif isinstance(options, cls):
			base = options
		elif isinstance(options, Mapping):
			base = cls.from_mapping(options)
		else:
			raise TypeError(f"options must be ParseOptions or a mapping, not {type(options).__name__}")
		if not overrides:
			return base
		return replace(base, **_normalize(overrides))


def _normalize(mapping: Mapping[str, Any]) -> dict[str, Any]:
	names = {f.name for f in fields(ParseOptions)}
	out: dict[str, Any] = {}
	for key, value in mapping.items():
		name = _ALIASES.get(key, key)
		if name not in names:
			raise TypeError(f"unknown parse option '{key}'")
		out[name] = value
	return out


__all__ = ["ParseOptions"]
