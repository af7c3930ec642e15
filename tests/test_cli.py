"""Tests for the qwhtml CLI."""

import pytest
from typer.testing import CliRunner

from qwhtml.cli import EXIT_INTERNAL, app, handle_error, parse_vars
from qwhtml.exceptions import BuilderConsumedError, TemplateLoadError

runner = CliRunner()

PAGE = """- kind: element
  name: h1
  children:
    - kind: literal
      text: "Hello, "
    - kind: splice
      expr: name
"""


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.yaml"
    path.write_text(PAGE)
    return path


def test_render_with_var(page, tmp_path):
    result = runner.invoke(
        app, ["render", str(page), "--var", "name=<World>", "--config", str(tmp_path / "none.yaml")]
    )
    assert result.exit_code == 0, result.output
    assert result.output == "<h1>Hello, &lt;World&gt;</h1>"


def test_render_with_context_file(page, tmp_path):
    ctx = tmp_path / "ctx.yaml"
    ctx.write_text("name: Ann\n")
    result = runner.invoke(
        app, ["render", str(page), "-c", str(ctx), "--config", str(tmp_path / "none.yaml")]
    )
    assert result.exit_code == 0, result.output
    assert result.output == "<h1>Hello, Ann</h1>"


def test_dump_prints_listing(page, tmp_path):
    result = runner.invoke(
        app, ["render", str(page), "--dump", "--config", str(tmp_path / "none.yaml")]
    )
    assert result.exit_code == 0, result.output
    assert "w.write_str('<')" in result.output
    assert "write(Escaper(w), name)" in result.output


def test_config_file_sets_sink_name(page, tmp_path):
    cfg = tmp_path / "qwhtml.yaml"
    cfg.write_text("sink: out\n")
    result = runner.invoke(app, ["render", str(page), "--dump", "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert "out.write_str('<')" in result.output


def test_missing_template_exits_with_error(tmp_path):
    result = runner.invoke(
        app, ["render", str(tmp_path / "missing.yaml"), "--config", str(tmp_path / "none.yaml")]
    )
    assert result.exit_code == 1
    assert "Error: Cannot load template" in result.output


def test_undefined_variable_is_reported(page, tmp_path):
    result = runner.invoke(
        app, ["render", str(page), "--config", str(tmp_path / "none.yaml")]
    )
    assert result.exit_code == 1
    assert "Unexpected error" in result.output


def test_parse_vars():
    assert parse_vars(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}
    assert parse_vars(None) == {}


def test_parse_vars_rejects_missing_equals():
    with pytest.raises(SystemExit):
        parse_vars(["oops"])


@pytest.mark.parametrize("pair", [" =x", "=x", "  "])
def test_parse_vars_rejects_blank_key(pair):
    with pytest.raises(SystemExit):
        parse_vars([pair])


def test_parse_vars_strips_key():
    assert parse_vars([" name =Ann"]) == {"name": "Ann"}


def test_template_error_exits_with_one():
    with pytest.raises(SystemExit) as excinfo:
        handle_error(TemplateLoadError("page.yaml", "bad kind"))
    assert excinfo.value.code == 1


def test_builder_misuse_exits_with_internal_code(capsys):
    with pytest.raises(SystemExit) as excinfo:
        handle_error(BuilderConsumedError("write"))
    assert excinfo.value.code == EXIT_INTERNAL
    assert "internal error" in capsys.readouterr().err
