from __future__ import annotations

from pathlib import Path, PureWindowsPath

import pytest

from sharppkg.core.model import IncludeSpec, SelectionRules
from sharppkg.core.rules import is_loader_file, is_module_file, matches_exclude


@pytest.mark.parametrize(
    "name",
    [
        "SharpLoader.dll",
        "sharploader.dll",
        "SharpLoader.Core.dll",
        "SharpMC.SharpLoader.Api.dll",
        "sharpmc.sharploader.api.dll",
    ],
)
def test_is_loader_file_matches_loader_family(name: str):
    assert is_loader_file(name)


@pytest.mark.parametrize("name", ["demo.dll", "MySharpLoader.dll", "SharpMC.Other.dll", "Loader.dll"])
def test_is_loader_file_rejects_other_names(name: str):
    assert not is_loader_file(name)


def test_is_module_file_case_insensitive():
    assert is_module_file("Helper.DLL", (".dll",))
    assert is_module_file("helper.so", (".dll", ".so"))
    assert not is_module_file("helper.pdb", (".dll",))


def test_matches_exclude_exact_name_case_insensitive():
    assert matches_exclude("/out/Newtonsoft.Json.dll", ["newtonsoft.json.dll"])
    assert not matches_exclude("/out/Newtonsoft.Json.dll", ["Newtonsoft.dll"])


def test_matches_exclude_path_suffix():
    assert matches_exclude("/build/out/Debug.Helper.dll", ["out/debug.helper.dll"])
    assert matches_exclude("/build/out/Debug.Helper.dll", ["Helper.dll"])
    assert not matches_exclude("/build/out/Debug.Helper.dll", ["other/Debug.Helper.dll"])


def test_matches_exclude_normalizes_separators():
    assert matches_exclude(PureWindowsPath(r"C:\build\out\a.dll"), [r"out\A.dll"])


def test_matches_exclude_ignores_blank_patterns():
    assert not matches_exclude("/out/a.dll", ["", "  "])


def test_include_spec_defaults_target_to_file_name():
    spec = IncludeSpec(source=Path("docs/README.md"))
    assert spec.arcname == "README.md"

    spec = IncludeSpec(source=Path("docs/README.md"), target="docs\\readme.txt")
    assert spec.arcname == "docs/readme.txt"


def test_include_spec_parse():
    assert IncludeSpec.parse("a/b.txt") == IncludeSpec(source=Path("a/b.txt"))
    assert IncludeSpec.parse("a/b.txt=c/d.txt").arcname == "c/d.txt"
    assert IncludeSpec.parse("a/b.txt=").arcname == "b.txt"
    with pytest.raises(ValueError, match=r"expected SRC or SRC=TARGET"):
        IncludeSpec.parse("=x")


def test_selection_rules_defaults_and_suffix_normalization():
    rules = SelectionRules()
    assert rules.exclude_loader_files is True
    assert rules.include_all_discovered is False
    assert rules.module_suffixes == (".dll",)

    assert SelectionRules(module_suffixes=["so", ".dylib"]).module_suffixes == (".so", ".dylib")

    with pytest.raises(ValueError, match=r"excludes: expected a list/tuple"):
        SelectionRules(excludes="x.dll")
