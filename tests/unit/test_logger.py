"""
Unit tests for the run logger.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from verstamp_generator.logger import ROOT_LOGGER_NAME, get_logger


def test_run_id_generated():
    logger = get_logger(console=False)
    try:
        assert "-" in logger.get_run_id()
    finally:
        logger.close()


def test_explicit_run_id():
    logger = get_logger(run_id="build-42", console=False)
    try:
        assert logger.get_run_id() == "build-42"
    finally:
        logger.close()


def test_json_file_records(tmp_path: Path):
    log_file = tmp_path / "logs" / "verstamp.jsonl"
    logger = get_logger(run_id="build-42", json_file=log_file, console=False)
    logger.info("Wrote: include/version.h", output="include/version.h", changed=True)
    logger.debug("filtered out at INFO")
    logger.close()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["run_id"] == "build-42"
    assert record["level"] == "INFO"
    assert record["message"] == "Wrote: include/version.h"
    assert record["output"] == "include/version.h"
    assert record["changed"] is True
    assert record["timestamp"].endswith("Z")


def test_module_loggers_share_handlers(tmp_path: Path):
    log_file = tmp_path / "verstamp.jsonl"
    logger = get_logger(json_file=log_file, console=False, log_level="DEBUG")
    logging.getLogger(f"{ROOT_LOGGER_NAME}.vcs").warning("git unavailable")
    logger.close()

    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert record["logger"] == f"{ROOT_LOGGER_NAME}.vcs"
    assert record["message"] == "git unavailable"


def test_new_run_replaces_handlers(tmp_path: Path):
    first = get_logger(json_file=tmp_path / "a.jsonl", console=False)
    second = get_logger(json_file=tmp_path / "b.jsonl", console=False)
    try:
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1
        second.info("only in b")
    finally:
        first.close()
        second.close()

    assert (tmp_path / "b.jsonl").read_text(encoding="utf-8")
    assert (tmp_path / "a.jsonl").read_text(encoding="utf-8") == ""


def test_console_goes_to_stderr(capsys):
    logger = get_logger(console=True)
    logger.warning("Artifact out of date: version.h")
    logger.close()

    captured = capsys.readouterr()
    assert "[WARNING] Artifact out of date: version.h" in captured.err
    assert captured.out == ""
