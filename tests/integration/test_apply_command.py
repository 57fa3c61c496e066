from typer.testing import CliRunner

from upgrader.changes import ChangeSetStorage, CodeChangeSet
from upgrader.cli.main import app
from upgrader.test_utils import SpyBus

runner = CliRunner()


def _store(tmp_path, filename="changes.json") -> str:
    cs = CodeChangeSet()
    cs.add_file_change(
        "code/Page.php",
        "<?php use SilverStripe\\CMS\\Model\\SiteTree;\n",
        "<?php\n",
    )
    cs.move("code/Legacy.php", "src/Legacy.php")
    cs.add_warning("code/Page.php", 1, "Check the new import")
    path = tmp_path / filename
    ChangeSetStorage().dump(cs, path)
    return str(path)


def test_apply_e2e(workspace_factory, tmp_path, monkeypatch):
    # 1. Arrange
    (
        workspace_factory.with_project_name("site")
        .with_config({"diff_context": 1})
        .with_source("code/Page.php", "<?php\n")
        .with_source("code/Legacy.php", "<?php class Legacy {}\n")
    ).build()
    change_set_file = _store(tmp_path)

    # 2. Act
    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(
            app, ["apply", change_set_file, "--yes"], catch_exceptions=False
        )

    # 3. Assert
    assert result.exit_code == 0, result.stdout
    spy_bus.assert_id_called("apply.run.success", level="success")
    assert "modified: code/Page.php" in result.stdout
    assert "renamed: code/Legacy.php -> src/Legacy.php" in result.stdout
    assert "code/Page.php:1 Check the new import" in result.stdout

    assert "SiteTree" in (tmp_path / "code/Page.php").read_text()
    assert (tmp_path / "src/Legacy.php").read_text() == "<?php class Legacy {}\n"
    assert not (tmp_path / "code/Legacy.php").exists()


def test_apply_dry_run(workspace_factory, tmp_path, monkeypatch):
    workspace_factory.with_project_name("site").with_source(
        "code/Page.php", "<?php\n"
    ).build()
    change_set_file = _store(tmp_path, "changes.yaml")

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(
            app, ["apply", change_set_file, "--dry-run"], catch_exceptions=False
        )

    assert result.exit_code == 0, result.stdout
    spy_bus.assert_id_called("apply.run.preview_header")
    spy_bus.assert_id_called("apply.run.dry_run")
    assert (tmp_path / "code/Page.php").read_text() == "<?php\n"


def test_apply_declined_confirmation(workspace_factory, tmp_path, monkeypatch):
    workspace_factory.with_project_name("site").with_source(
        "code/Page.php", "<?php\n"
    ).build()
    change_set_file = _store(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["apply", change_set_file], input="n\n")

    assert result.exit_code == 1
    spy_bus.assert_id_called("apply.run.aborted", level="error")
    assert (tmp_path / "code/Page.php").read_text() == "<?php\n"


def test_apply_malformed_change_set(workspace_factory, tmp_path, monkeypatch):
    workspace_factory.with_project_name("site").with_source(
        "changes.json", '{"changes": []}'
    ).build()

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["apply", str(tmp_path / "changes.json")])

    assert result.exit_code == 1
    spy_bus.assert_id_called("error.generic", level="error")
