"""CLI tests for the fileset command."""

from __future__ import annotations

from pathlib import Path

import pytest

from fileset.cli import main


def _make_tree(root: Path) -> None:
    for rel in ["src/a/one.csproj", "src/b/ONE.csproj", "src/c/one.csproj", "src/c/two.csproj"]:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("<Project />\n")
    (root / "README.md").write_text("# Root\n")


def _listed(out: str, root: Path) -> list[str]:
    return sorted(
        Path(line).relative_to(root.resolve()).as_posix() for line in out.splitlines() if line
    )


def test_combined_patterns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "**/*.csproj", "!**/c/*.csproj"]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/a/one.csproj", "src/b/ONE.csproj"]


def test_include_exclude_flags(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "-i", "**/*.csproj", "-e", "**/c/*.csproj"]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/a/one.csproj", "src/b/ONE.csproj"]


def test_case_sensitive_flag(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "--case-sensitive", "**/one.csproj"]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/a/one.csproj", "src/c/one.csproj"]


def test_base_path_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["--no-config", "--base-path", str(tmp_path / "src" / "c"), "*"]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/c/one.csproj", "src/c/two.csproj"]


def test_no_matches_is_success(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "**/*.nothing"]) == 0
    assert capsys.readouterr().out == ""


def test_missing_base_path_is_success(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--no-config", "-b", str(tmp_path / "missing"), "**/*"]) == 0
    assert capsys.readouterr().out == ""


def test_no_includes_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "!**/*.csproj"]) == 1
    assert "No include patterns" in capsys.readouterr().err


def test_config_file_supplies_patterns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "fileset.toml").write_text(
        'includes = ["**/*.csproj"]\nexcludes = ["**/c/*.csproj"]\n'
    )
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/a/one.csproj", "src/b/ONE.csproj"]


def test_cli_patterns_override_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "fileset.toml").write_text('includes = ["**/*.csproj"]\nexcludes = ["**/a/*"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["*.md"]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["README.md"]


def test_no_config_skips_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "fileset.toml").write_text('excludes = ["**/*"]\n')
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "*.md"]) == 0
    assert _listed(capsys.readouterr().out, tmp_path) == ["README.md"]


def test_explicit_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    config = tmp_path / "conf" / "custom.toml"
    config.parent.mkdir()
    config.write_text('includes = ["**/*.csproj"]\nbase-path = "../src/c"\n')
    monkeypatch.chdir(tmp_path)
    assert main(["--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert _listed(out, tmp_path) == ["src/c/one.csproj", "src/c/two.csproj"]


def test_missing_config_file_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--config", str(tmp_path / "nope.toml"), "*"]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_malformed_config_file_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "fileset.toml").write_text("includes = [\n")
    monkeypatch.chdir(tmp_path)
    assert main(["*"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_config_with_wrong_value_type_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "fileset.toml").write_text("includes = 5\n")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "includes" in err


def test_show_settings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--no-config", "--show-settings", "**/*.md", "!drafts/**"]) == 0
    err = capsys.readouterr().err
    assert '"Includes": [ "**/*.md" ]' in err
    assert '"Excludes": [ "drafts/**" ]' in err
    assert f'"BasePath": {Path.cwd()}' in err


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("v") or out == "unknown (package not installed)"


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "fileset: Find files from include and exclude glob patterns" in out
    assert "Common usage:" in out
    assert "--case-sensitive" in out
