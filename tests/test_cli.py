import json

from typer.testing import CliRunner

from conftest import write_sources

from codegrapher.cli.main import app

runner = CliRunner()


def test_missing_argument_exits_with_one():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Usage" in result.output


def test_writes_codegraph_into_working_directory(project_dir, tmp_path, monkeypatch):
    write_sources(
        project_dir,
        {"Sources/Player.swift": "class Player: NSObject, Playable { func play() { start() } }"},
    )
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    result = runner.invoke(app, [str(project_dir)])

    assert result.exit_code == 0, result.output
    output = workdir / "codegraph.json"
    payload = json.loads(output.read_text())
    assert payload["Player"]["inheritedTypes"] == ["NSObject"]
    assert payload["Player"]["conformedProtocols"] == ["Playable"]
    assert payload["Player"]["methods"][0]["calls"] == ["start"]
    assert not (project_dir / "codegraph.json").exists()


def test_output_option_overrides_location(project_dir, tmp_path):
    write_sources(project_dir, {"A.swift": "struct A {}"})
    target = tmp_path / "graphs" / "a.json"

    result = runner.invoke(app, [str(project_dir), "--output", str(target), "--summary"])

    assert result.exit_code == 0, result.output
    assert list(json.loads(target.read_text())) == ["A"]
    assert "Code graph" in result.output


def test_no_sources_exits_cleanly_without_output(project_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [str(project_dir)])

    assert result.exit_code == 0
    assert "No .swift files found" in result.output
    assert not (tmp_path / "codegraph.json").exists()


def test_missing_root_exits_with_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [str(tmp_path / "nowhere")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_bad_file_is_reported_but_graph_is_written(project_dir, tmp_path):
    write_sources(project_dir, {"Good.swift": "struct Good {}"})
    (project_dir / "Bad.swift").write_bytes(b"\xff\xfe\xfa")
    target = tmp_path / "out.json"

    result = runner.invoke(app, [str(project_dir), "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert "Skipped 1 file" in result.output
    assert list(json.loads(target.read_text())) == ["Good"]


def test_fail_fast_exits_with_one_and_writes_nothing(project_dir, tmp_path):
    write_sources(project_dir, {"Good.swift": "struct Good {}"})
    (project_dir / "Bad.swift").write_bytes(b"\xff\xfe\xfa")
    target = tmp_path / "out.json"

    result = runner.invoke(app, [str(project_dir), "-o", str(target), "--fail-fast"])

    assert result.exit_code == 1
    assert not target.exists()


def test_merge_duplicates_flag(project_dir, tmp_path):
    write_sources(
        project_dir,
        {
            "A.swift": "extension Foo: Equatable { func a() {} }",
            "B.swift": "extension Foo: Hashable { func b() {} }",
        },
    )
    target = tmp_path / "out.json"

    result = runner.invoke(app, [str(project_dir), "-o", str(target), "--merge-duplicates"])

    assert result.exit_code == 0, result.output
    ext = json.loads(target.read_text())["Extension_of_Foo"]
    assert ext["conformedProtocols"] == ["Equatable", "Hashable"]
    assert [m["name"] for m in ext["methods"]] == ["a", "b"]


def test_config_file_is_applied(project_dir, tmp_path):
    write_sources(
        project_dir,
        {"A.swift": "class Foo { var a = 1 }", "B.swift": "class Foo { var b = 2 }"},
    )
    target = tmp_path / "configured.json"
    config = tmp_path / "codegrapher.yaml"
    config.write_text(f"output_path: {target}\nduplicate_policy: merge\n")

    result = runner.invoke(app, [str(project_dir), "--config", str(config)])

    assert result.exit_code == 0, result.output
    props = json.loads(target.read_text())["Foo"]["properties"]
    assert [p["name"] for p in props] == ["a", "b"]


def test_missing_config_file_exits_with_one(project_dir, tmp_path):
    result = runner.invoke(app, [str(project_dir), "--config", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
