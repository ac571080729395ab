"""Tests for the ogen-fixnull, ogen-fixerror and ogen-fixup commands."""

import pytest
from typer.testing import CliRunner

from ogenfix.run.fixerror import app as fixerror_app
from ogenfix.run.fixnull import app as fixnull_app
from ogenfix.run.fixup import app as fixup_app

runner = CliRunner()


# --- Single-file commands ---


def test_fixnull_fixes_file(tmp_path, opt_foo):
    path = tmp_path / "oas_json_gen.go"
    path.write_bytes(opt_foo)
    result = runner.invoke(fixnull_app, [str(path)])
    assert result.exit_code == 0, result.output
    assert f"Fixed 1 Opt* Decode methods in {path}" in result.output
    assert b"d.Next() == jx.Null" in path.read_bytes()

    result = runner.invoke(fixnull_app, [str(path)])
    assert result.exit_code == 0
    assert f"No Opt* Decode methods needed fixing in {path}" in result.output


def test_fixerror_fixes_file(tmp_path, decoders_file):
    path = tmp_path / "oas_response_decoders_gen.go"
    path.write_bytes(decoders_file)
    result = runner.invoke(fixerror_app, [str(path)])
    assert result.exit_code == 0, result.output
    assert f"Fixed 2 UnexpectedStatusCode returns in {path}" in result.output
    assert path.read_bytes().count(b"io.ReadAll(resp.Body)") == 2


def test_nothing_to_do_leaves_file_untouched(tmp_path):
    path = tmp_path / "empty.go"
    path.write_bytes(b"")
    result = runner.invoke(fixerror_app, [str(path)])
    assert result.exit_code == 0
    assert "No UnexpectedStatusCode returns needed fixing" in result.output
    assert path.read_bytes() == b""


@pytest.mark.parametrize("app", [fixnull_app, fixerror_app])
@pytest.mark.parametrize("args", [[], ["a.go", "b.go"]])
def test_wrong_argument_count_is_usage_error(app, args, tmp_path):
    result = runner.invoke(app, args)
    assert result.exit_code == 2


def test_read_error_exits_nonzero(tmp_path):
    result = runner.invoke(fixnull_app, [str(tmp_path / "missing.go")])
    assert result.exit_code == 1
    assert "ogen-fixnull: read file:" in result.output


# --- ogen-fixup ---


def test_fixup_applies_default_config(tmp_path, opt_foo, decoders_file):
    (tmp_path / "oas_json_gen.go").write_bytes(opt_foo)
    (tmp_path / "oas_response_decoders_gen.go").write_bytes(decoders_file)
    result = runner.invoke(fixup_app, [str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "Fixed 3 site(s)" in result.output
    assert b"d.Next() == jx.Null" in (tmp_path / "oas_json_gen.go").read_bytes()
    assert b'"bytes"' in (tmp_path / "oas_response_decoders_gen.go").read_bytes()

    result = runner.invoke(fixup_app, [str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "Nothing to do" in result.output


def test_fixup_config_override_disables_patcher(tmp_path, opt_foo, decoders_file):
    from ogenfix.run.fixup import DEFAULT_CONFIG_FILE

    (tmp_path / "oas_json_gen.go").write_bytes(opt_foo)
    (tmp_path / "oas_response_decoders_gen.go").write_bytes(decoders_file)
    result = runner.invoke(
        fixup_app, [str(tmp_path), "-c", str(DEFAULT_CONFIG_FILE), "-c", "patchers.fixerror.enabled=false"]
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "oas_response_decoders_gen.go").read_bytes() == decoders_file
    assert b"d.Next() == jx.Null" in (tmp_path / "oas_json_gen.go").read_bytes()


def test_fixup_missing_file_exits_nonzero(tmp_path):
    result = runner.invoke(fixup_app, [str(tmp_path)])
    assert result.exit_code == 1
    assert "read file:" in result.output


def test_fixup_invalid_config(tmp_path):
    result = runner.invoke(fixup_app, [str(tmp_path), "-c", "patchers.fixeverything.files=[a.go]"])
    assert result.exit_code == 2
    assert "invalid config" in result.output


def test_fixup_log_file(tmp_path, opt_foo):
    (tmp_path / "oas_json_gen.go").write_bytes(opt_foo)
    log_path = tmp_path / "ogenfix.log"
    result = runner.invoke(
        fixup_app,
        [str(tmp_path), "-c", "patchers.fixnull.files=[oas_json_gen.go]", "--log-file", str(log_path)],
    )
    assert result.exit_code == 0, result.output
    log_text = log_path.read_text()
    assert f"Logging to '{log_path}'" in log_text
    assert "fixnull: rewriting site 'Foo'" in log_text


def test_fixup_file_options_replace_configured_files(tmp_path, opt_foo, decoders_file):
    (tmp_path / "custom_json.go").write_bytes(opt_foo)
    (tmp_path / "custom_decoders.go").write_bytes(decoders_file)
    result = runner.invoke(
        fixup_app,
        [str(tmp_path), "--json-file", "custom_json.go", "--decoders-file", "custom_decoders.go"],
    )
    assert result.exit_code == 0, result.output
    assert "Fixed 3 site(s)" in result.output
    assert b"d.Next() == jx.Null" in (tmp_path / "custom_json.go").read_bytes()
    assert b"io.ReadAll(resp.Body)" in (tmp_path / "custom_decoders.go").read_bytes()


def test_fixup_unset_file_option_keeps_configured_files(tmp_path, opt_foo):
    (tmp_path / "custom_json.go").write_bytes(opt_foo)
    result = runner.invoke(
        fixup_app,
        [str(tmp_path), "-c", "patchers.fixnull.files=[custom_json.go]"],
    )
    assert result.exit_code == 0, result.output
    assert b"d.Next() == jx.Null" in (tmp_path / "custom_json.go").read_bytes()
