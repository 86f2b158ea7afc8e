import logging

from path_viewer.config import ConfigManager
from path_viewer.logging_config import setup_logging


def test_packaged_defaults_are_loaded():
    cfg = ConfigManager()
    assert cfg.get_report_config()["file_name"] == "output.json"
    assert cfg.get_report_config()["excluded_kinds"] == ["npe-good-source"]
    assert cfg.get_decoration_config()["border_width"] == 1
    assert cfg.get_keybindings()["all-paths.next"] == "<Alt-Down>"
    assert cfg.get_ui_config()["theme"] == "light"
    assert cfg.get_logging_config()["version"] == 1


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_defaults_are_copied_to_user_dir(isolated_config):
    ConfigManager()
    assert (isolated_config / "viewer.yml").exists()
    assert (isolated_config / "logging.yml").exists()


def test_user_overrides_merge_per_section(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "viewer.yml").write_text(
        "report:\n  file_name: findings.json\n", encoding="utf-8"
    )
    cfg = ConfigManager()
    report = cfg.get_report_config()
    assert report["file_name"] == "findings.json"
    assert report["excluded_kinds"] == ["npe-good-source"]
    assert cfg.get_keybindings()["path-details.next"] == "<Alt-Right>"


def test_invalid_user_override_is_ignored(isolated_config):
    isolated_config.mkdir(parents=True)
    (isolated_config / "viewer.yml").write_text("report: [unclosed\n", encoding="utf-8")
    assert ConfigManager().get_report_config()["file_name"] == "output.json"


def test_setup_logging_writes_to_log_dir(tmp_path, monkeypatch):
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("PATH_VIEWER_LOG_DIR", str(log_dir))
    monkeypatch.setenv("PATH_VIEWER_DEBUG_MODULES", "path_viewer.core.providers")
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    try:
        setup_logging()
        logging.getLogger("path_viewer.test").info("hello")
        assert (log_dir / "app.log").exists()
        assert logging.getLogger("path_viewer.core.providers").level == logging.DEBUG
    finally:
        for handler in root.handlers:
            if handler not in saved[1]:
                handler.close()
        root.handlers[:] = saved[1]
        root.setLevel(saved[0])
        providers_logger = logging.getLogger("path_viewer.core.providers")
        providers_logger.setLevel(logging.NOTSET)
        providers_logger.handlers.clear()
