# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from solast import parse
from solast.parser import ast as A


def _units(src: str):
	result = parse(src)
	assert result.errors == ()
	return result.root.children


def test_pragma_version() -> None:
	(pragma,) = _units("pragma solidity ^0.8.0;")
	assert pragma == A.PragmaDirective(name="solidity", value="^0.8.0")


def test_pragma_value_keeps_inner_spaces() -> None:
	(pragma,) = _units("pragma solidity >=0.7.0 <0.9.0;")
	assert pragma.value == ">=0.7.0 <0.9.0"


def test_pragma_abicoder() -> None:
	(pragma,) = _units("pragma abicoder v2;")
	assert pragma == A.PragmaDirective(name="abicoder", value="v2")


def test_plain_import() -> None:
	(imp,) = _units('import "./Token.sol";')
	assert imp == A.ImportDirective(path="./Token.sol")


def test_import_with_unit_alias() -> None:
	first, second = _units('import "./a.sol" as A;\nimport * as B from "./b.sol";')
	assert first == A.ImportDirective(path="./a.sol", unit_alias="A")
	assert second == A.ImportDirective(path="./b.sol", unit_alias="B")


def test_import_symbol_aliases() -> None:
	(imp,) = _units("import {X, Y as Z} from 'lib/c.sol';")
	assert imp.path == "lib/c.sol"
	assert imp.unit_alias is None
	assert imp.symbol_aliases == (A.SymbolAlias(symbol="X"), A.SymbolAlias(symbol="Y", alias="Z"))


def test_source_unit_keeps_declaration_order() -> None:
	units = _units(
		"""
pragma solidity ^0.8.0;
import "./a.sol";
contract C {}
struct S { uint a; }
"""
	)
	assert [u.type for u in units] == ["PragmaDirective", "ImportDirective", "ContractDefinition", "StructDefinition"]
