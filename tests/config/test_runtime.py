from __future__ import annotations

import logging
from pathlib import Path

import pytest

from blind_quoter import config


@pytest.mark.parametrize(
    "value, default, expected",
    [
        (None, False, False),
        ("", True, True),
        ("yes", False, True),
        ("OFF", True, False),
        ("2", False, True),
        ("maybe", True, True),
    ],
)
def test_to_bool(value, default: bool, expected: bool) -> None:
    assert config._to_bool(value, default) is expected


def test_build_config_defaults(tmp_path: Path) -> None:
    cfg = config.build_config({}, workdir=tmp_path, configure=False)

    assert cfg.catalog_path == config.DEFAULT_CATALOG_PATH
    assert cfg.catalog_path.exists()
    assert cfg.log_level == "INFO"
    assert cfg.debug is False
    assert cfg.workdir == tmp_path


def test_build_config_reads_environment(tmp_path: Path) -> None:
    env = {
        "BLIND_QUOTER_CATALOG": str(tmp_path / "prices.json"),
        "BLIND_QUOTER_DEBUG": "1",
        "BLIND_QUOTER_WORKDIR": str(tmp_path),
    }

    cfg = config.build_config(env, configure=False)

    assert cfg.catalog_path == (tmp_path / "prices.json").resolve()
    assert cfg.debug is True
    assert cfg.log_level == "DEBUG"
    assert cfg.workdir == tmp_path


def test_explicit_log_level_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLIND_QUOTER_LOG_LEVEL", "warning")
    monkeypatch.setenv("BLIND_QUOTER_DEBUG", "true")

    cfg = config.build_config(configure=False)

    assert cfg.log_level == "WARNING"


def test_configure_logging_is_applied(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.build_config({"BLIND_QUOTER_LOG_LEVEL": "debug"})
    config.configure_logging("nonsense")

    assert calls[0]["level"] == logging.DEBUG
    assert calls[0]["format"] == config.LOG_FORMAT
    assert calls[1]["level"] == logging.INFO
