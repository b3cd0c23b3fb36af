"""
Tests for the schemalint CLI.

Verifies:
1.  Argument wiring from ``main`` to the command handlers.
2.  ``check`` exit codes: 0 clean, 1 diagnostics, 2 load failures or missing paths.
3.  ``check --json`` prints parseable diagnostics and keeps logs off stdout.
4.  ``rules`` and ``sets`` introspection output.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from schemalint.cli.__main__ import main
from schemalint.cli.commands import collect_python_files

VIOLATION = """\
from tfsdk.helper import schema

SCHEMA = {
  "name": schema.Schema(computed=True, diff_suppress_func=suppress_case),
}
"""

CLEAN = """\
from tfsdk.helper import schema

SCHEMA = {
  "name": schema.Schema(optional=True, computed=True, diff_suppress_func=suppress_case),
}
"""


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
  """Keeps configuration lookup away from the repository's own pyproject.toml."""
  monkeypatch.chdir(tmp_path)


@pytest.fixture
def provider(tmp_path):
  root = tmp_path / "provider"
  root.mkdir()
  (root / "resource_a.py").write_text(VIOLATION, encoding="utf-8")
  (root / "resource_b.py").write_text(CLEAN, encoding="utf-8")
  return root


@patch("schemalint.cli.commands.handle_check")
def test_check_arguments_are_forwarded(mock_handle):
  mock_handle.return_value = 0

  ret = main(["check", "src/", "--json", "--jobs", "4", "--disable", "S011", "--schema-type", "a.Schema"])

  assert ret == 0
  mock_handle.assert_called_once()
  args, kwargs = mock_handle.call_args
  assert args[0] == [Path("src/")]
  assert kwargs["json_mode"] is True
  assert kwargs["jobs"] == 4
  assert kwargs["disabled_rules"] == ["S011"]
  assert kwargs["schema_types"] == ["a.Schema"]
  assert kwargs["resource_data_types"] is None


def test_check_json_reports_violation(provider, capsys, captured_console):
  ret = main(["check", str(provider), "--json"])

  assert ret == 1
  data = json.loads(capsys.readouterr().out)
  assert len(data) == 1
  assert data[0]["rule"] == "S011"
  assert data[0]["path"] == str(provider / "resource_a.py")
  assert (data[0]["line"], data[0]["column"]) == (4, 18)


def test_check_clean_file(provider, captured_console):
  ret = main(["check", str(provider / "resource_b.py")])

  assert ret == 0
  assert "No issues found" in captured_console.export_text()


def test_check_table_output(provider, captured_console):
  ret = main(["check", str(provider)])

  assert ret == 1
  text = captured_console.export_text()
  assert "resource_a.py:4:18" in text
  assert "S011" in text


def test_check_missing_path(tmp_path, captured_console):
  ret = main(["check", str(tmp_path / "nowhere")])

  assert ret == 2
  assert "Path not found" in captured_console.export_text()


def test_check_broken_file_does_not_hide_other_results(provider, capsys, captured_console):
  """
  Scenario: One file has a syntax error.
  Expectation: Exit code 2, but diagnostics of the other files are still printed.
  """
  (provider / "resource_c.py").write_text("def broken(:\n", encoding="utf-8")

  ret = main(["check", str(provider), "--json"])

  assert ret == 2
  data = json.loads(capsys.readouterr().out)
  assert [d["path"] for d in data] == [str(provider / "resource_a.py")]
  assert "resource_c.py" in captured_console.export_text()


def test_check_disable_rule(provider, captured_console):
  ret = main(["check", str(provider), "--disable", "s011"])

  assert ret == 0


def test_check_reads_pyproject_settings(provider, tmp_path, capsys, captured_console):
  (tmp_path / "pyproject.toml").write_text('[tool.schemalint]\ndisabled_rules = ["S011"]\n', encoding="utf-8")

  ret = main(["check", str(provider), "--json"])

  assert ret == 0
  assert json.loads(capsys.readouterr().out) == []


def test_collect_python_files_skips_tooling_dirs(tmp_path):
  (tmp_path / "pkg").mkdir()
  (tmp_path / "pkg" / "b.py").write_text("", encoding="utf-8")
  (tmp_path / "a.py").write_text("", encoding="utf-8")
  (tmp_path / "notes.txt").write_text("", encoding="utf-8")
  (tmp_path / ".venv").mkdir()
  (tmp_path / ".venv" / "site.py").write_text("", encoding="utf-8")

  files = collect_python_files([tmp_path])

  assert files == [tmp_path / "a.py", tmp_path / "pkg" / "b.py"]


def test_rules_lists_catalog(captured_console):
  ret = main(["rules"])

  assert ret == 0
  text = captured_console.export_text()
  assert "S011" in text
  assert "check for schemas with only computed enabled" in text


def test_sets_lists_setter_calls(tmp_path, captured_console):
  f = tmp_path / "resource_thing.py"
  f.write_text(
    "from tfsdk.helper import schema\n"
    "\n"
    "def read(d: schema.ResourceData, meta):\n"
    "  d.set('name', meta.name)\n"
    "  meta.set('name', 1)\n",
    encoding="utf-8",
  )

  ret = main(["sets", str(f)])

  assert ret == 0
  text = captured_console.export_text()
  assert f"{f}:4:3: d.set()" in text
  assert "meta.set" not in text


def test_check_warns_about_unknown_disabled_rule(provider, captured_console):
  ret = main(["check", str(provider / "resource_b.py"), "--disable", "S999"])

  assert ret == 0
  assert "Unknown rule in disabled rules: S999" in captured_console.export_text()


def test_check_json_keeps_logs_off_stdout(provider, capsys):
  """
  Scenario: JSON mode with an unparsable file and the default consoles.
  Expectation: stdout holds only the JSON document; the load warning goes to stderr.
  """
  (provider / "resource_c.py").write_text("def broken(:\n", encoding="utf-8")

  ret = main(["check", str(provider), "--json"])

  captured = capsys.readouterr()
  assert ret == 2
  assert [d["rule"] for d in json.loads(captured.out)] == ["S011"]
  assert "WARNING" in captured.err


def test_sets_reports_broken_file_and_releases_units(tmp_path, captured_console):
  good = tmp_path / "resource_good.py"
  good.write_text(
    "from tfsdk.helper import schema\n\ndef read(d: schema.ResourceData):\n  d.set('a', 1)\n",
    encoding="utf-8",
  )
  bad = tmp_path / "resource_bad.py"
  bad.write_text("def broken(:\n", encoding="utf-8")

  with patch("schemalint.cli.handlers.rules.Executor.release", autospec=True) as mock_release:
    ret = main(["sets", str(bad), str(good)])

  assert ret == 2
  assert f"{good}:4:3: d.set()" in captured_console.export_text()
  assert mock_release.call_count == 1


def test_sets_releases_units_when_analysis_fails(tmp_path, captured_console):
  files = []
  for name in ("resource_a.py", "resource_b.py"):
    f = tmp_path / name
    f.write_text("x.set('a', 1)\n", encoding="utf-8")
    files.append(str(f))

  with (
    patch("schemalint.passes.resourcedataset.is_resource_data_set", side_effect=RuntimeError("boom")),
    patch("schemalint.cli.handlers.rules.Executor.release", autospec=True) as mock_release,
  ):
    ret = main(["sets", *files])

  assert ret == 2
  assert mock_release.call_count == 2
  assert "boom" in captured_console.export_text()
