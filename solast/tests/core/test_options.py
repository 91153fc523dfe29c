# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from solast.core.options import ParseOptions


def test_defaults() -> None:
	opts = ParseOptions.coerce()
	assert opts == ParseOptions(tolerant=False, include_ranges=True, max_errors=100)


def test_mapping_accepts_camel_case_keys() -> None:
	opts = ParseOptions.coerce({"tolerant": True, "includeRanges": False, "maxErrors": 3})
	assert opts == ParseOptions(tolerant=True, include_ranges=False, max_errors=3)


def test_keyword_overrides_apply_on_top() -> None:
	base = ParseOptions(tolerant=True)
	opts = ParseOptions.coerce(base, max_errors=5)
	assert opts.tolerant is True
	assert opts.max_errors == 5
	assert base.max_errors == 100


def test_unknown_option_is_rejected() -> None:
	with pytest.raises(TypeError, match="unknown parse option 'strict'"):
		ParseOptions.coerce({"strict": True})
	with pytest.raises(TypeError):
		ParseOptions.coerce(None, verbose=True)


def test_max_errors_must_be_positive() -> None:
	with pytest.raises(ValueError, match="max_errors"):
		ParseOptions(max_errors=0)


def test_rejects_other_option_types() -> None:
	with pytest.raises(TypeError, match="options must be"):
		ParseOptions.coerce(["tolerant"])
