from __future__ import annotations

import json
import zipfile
from pathlib import Path

from typer.testing import CliRunner

from conftest import make_manifest_dict, touch_files, write_manifest
from sharppkg.cli.main import app


def _make_project(tmp_path: Path, **manifest_overrides) -> tuple[Path, Path, Path]:
    project = tmp_path / "proj"
    out = tmp_path / "out"
    pkg = tmp_path / "packages"
    write_manifest(project, make_manifest_dict(**manifest_overrides))
    touch_files(out, "demo.dll", "helper.dll", "SharpLoader.dll")
    return project, out, pkg


def test_version_command():
    from sharppkg import __version__

    res = CliRunner().invoke(app, ["version"])

    assert res.exit_code == 0
    assert res.stdout.strip() == __version__


def test_pack_default_bundles_only_explicit_files(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path)

    res = runner.invoke(app, ["pack", str(project), "--output-dir", str(out), "--package-dir", str(pkg)])

    assert res.exit_code == 0, res.output
    archive = pkg / "demo-1.2.0.zip"
    assert res.stdout.strip() == str(archive)
    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == ["sharp.json", "demo.dll"]


def test_pack_include_all_with_includes_and_excludes(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path)
    touch_files(out, "extra.dll")
    touch_files(project, "README.md")

    res = runner.invoke(
        app,
        [
            "pack",
            str(project),
            "-o",
            str(out),
            "-p",
            str(pkg),
            "--include-all",
            "--include",
            "README.md=docs/README.md",
            "--exclude",
            "EXTRA.dll",
        ],
    )

    assert res.exit_code == 0, res.output
    with zipfile.ZipFile(pkg / "demo-1.2.0.zip") as zf:
        assert zf.namelist() == ["sharp.json", "demo.dll", "docs/README.md", "helper.dll"]


def test_pack_rules_file_and_flag_override(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path)
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"includeAllDiscovered": True, "excludes": ["helper.dll"]}), encoding="utf-8")

    res = runner.invoke(
        app,
        ["pack", str(project), "-o", str(out), "-p", str(pkg), "--rules", str(rules), "--keep-loader"],
    )

    assert res.exit_code == 0, res.output
    with zipfile.ZipFile(pkg / "demo-1.2.0.zip") as zf:
        assert zf.namelist() == ["sharp.json", "demo.dll", "SharpLoader.dll"]


def test_pack_missing_entry_point_exits_nonzero(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path, entryPoint="absent.dll")

    res = runner.invoke(app, ["pack", str(project), "-o", str(out), "-p", str(pkg)])

    assert res.exit_code == 1
    assert "entry point not found" in res.output
    assert not (pkg / "demo-1.2.0.zip").exists()


def test_pack_json_outcome(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path, namespace=None)

    res = runner.invoke(app, ["pack", str(project), "-o", str(out), "-p", str(pkg), "--json"])

    assert res.exit_code == 1
    payload = json.loads(res.stdout)
    assert payload["ok"] is False
    assert payload["archive"] is None
    assert payload["error"] == {"code": "manifest_validation", "message": "missing required field: namespace"}


def test_pack_bad_rules_file_is_bad_parameter(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path)
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"excludeLoaderFiles": "no"}), encoding="utf-8")

    res = runner.invoke(app, ["pack", str(project), "-o", str(out), "-p", str(pkg), "--rules", str(rules)])

    assert res.exit_code == 2
    assert not pkg.exists()


def test_list_is_a_dry_run(tmp_path: Path) -> None:
    runner = CliRunner()
    project, out, pkg = _make_project(tmp_path)

    res = runner.invoke(app, ["list", str(project), "-o", str(out), "--include-all"])

    assert res.exit_code == 0, res.output
    lines = res.stdout.strip().splitlines()
    assert [line.split("\t")[0] for line in lines] == ["sharp.json", "demo.dll", "helper.dll"]
    assert not pkg.exists()


def test_validate_prints_identity(tmp_path: Path) -> None:
    runner = CliRunner()
    project, _, _ = _make_project(tmp_path)

    res = runner.invoke(app, ["validate", str(project)])

    assert res.exit_code == 0
    assert res.stdout.strip() == "demo-1.2.0"


def test_validate_reports_missing_field(tmp_path: Path) -> None:
    runner = CliRunner()
    project, _, _ = _make_project(tmp_path, id=None)

    res = runner.invoke(app, ["validate", str(project)])

    assert res.exit_code == 1
    assert "missing required field: id" in res.output


def test_manifest_option_defaults_to_sharp_json_and_accepts_other_names(tmp_path: Path) -> None:
    runner = CliRunner()
    project = tmp_path / "proj"
    write_manifest(project, make_manifest_dict(id="other"), name="module.json")

    res_default = runner.invoke(app, ["validate", str(project)])
    res_named = runner.invoke(app, ["validate", str(project), "--manifest", "module.json"])

    assert res_default.exit_code == 1
    assert "sharp.json" in res_default.output
    assert res_named.exit_code == 0
    assert res_named.stdout.strip() == "other-1.2.0"
