import json

import pytest
from typer.testing import CliRunner

from stubrecon import __version__
from stubrecon.cli import app
from stubrecon.config import CompilerSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CompilerSettings.model_fields:
        monkeypatch.delenv("STUBRECON_" + name.upper(), raising=False)


@pytest.fixture
def workspace(tmp_path):
    descriptors = tmp_path / "exposed.json"
    descriptors.write_text(json.dumps({"classes": [
        {
            "name": "Foo",
            "fields": [{"name": "table", "type": {"name": "Map", "type_parameters": ["K", "V"]}}],
            "methods": [{"name": "bar", "parameters": [{"type": "string", "name": "arg0"}]}],
        },
        {"name": "Internal"},
    ]}), encoding="utf-8")

    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "Foo.json").write_text(json.dumps({
        "name": "Foo",
        "fields": [{"name": "table", "type": "Map<string,int>"}],
        "methods": [{"name": "bar", "parameters": [{"type": "string", "name": "end"}]}],
    }), encoding="utf-8")

    exclusions = tmp_path / "excluded.txt"
    exclusions.write_text("Internal\nGone\n", encoding="utf-8")
    return tmp_path


def test_compile_writes_merged_classes(workspace):
    output = workspace / "out" / "compiled.json"

    result = runner.invoke(app, [
        "compile",
        "--descriptors", str(workspace / "exposed.json"),
        "--docs-dir", str(workspace / "pages"),
        "--exclude-file", str(workspace / "excluded.txt"),
        "--output", str(output),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    [foo] = data["classes"]
    assert foo["name"] == "Foo"
    assert foo["fields"][0]["type"]["name"] == "Map"
    assert [a["name"] for a in foo["fields"][0]["type"]["arguments"]] == ["string", "int"]
    assert foo["methods"][0]["parameters"][0]["name"] == "_end"
    assert data["excluded"] == ["Internal"]
    assert data["unused_exclusions"] == ["Gone"]


def test_compile_with_workers_from_environment(workspace, monkeypatch):
    output = workspace / "compiled.json"
    monkeypatch.setenv("STUBRECON_DESCRIPTORS", str(workspace / "exposed.json"))
    monkeypatch.setenv("STUBRECON_WORKERS", "3")

    result = runner.invoke(app, ["compile", "--output", str(output)])

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [c["name"] for c in data["classes"]] == ["Foo", "Internal"]


def test_missing_descriptor_option_exits(tmp_path):
    result = runner.invoke(app, ["compile", "--output", str(tmp_path / "out.json")])
    assert result.exit_code == 1


def test_unreadable_descriptor_dump_exits(tmp_path):
    result = runner.invoke(app, [
        "compile",
        "--descriptors", str(tmp_path / "missing.json"),
        "--output", str(tmp_path / "out.json"),
    ])
    assert result.exit_code == 1
    assert not (tmp_path / "out.json").exists()


def test_consuming_exclusions_reject_parallel_workers(workspace):
    result = runner.invoke(app, [
        "compile",
        "--descriptors", str(workspace / "exposed.json"),
        "--consume-exclusions",
        "--workers", "4",
    ])
    assert result.exit_code == 1


def test_invalid_log_level_exits(workspace):
    result = runner.invoke(app, [
        "compile",
        "--descriptors", str(workspace / "exposed.json"),
        "--log-level", "chatty",
    ])
    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
