# File: tests/test_cli.py
"""Тесты для CLI (`a11y_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `scan`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

from a11y_scout.aggregator import ReportAggregator
from a11y_scout.cli import cli
from a11y_scout.crawler.models import PageResult
from a11y_scout.engine import ScanResult
from a11y_scout.exceptions import SetupError

cli_module = importlib.import_module("a11y_scout.cli")


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Каждый тест в пустом каталоге, чтобы не подхватить a11y_scout.yaml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def fake_scan(monkeypatch):
    """Патчим start_scan: одна страница без проблем, конфиг сохраняется для проверок."""
    seen = {}

    async def _scan(cfg):
        seen["cfg"] = cfg
        page = PageResult(url=cfg.start_url)
        agg = ReportAggregator()
        agg.record(page)
        return ScanResult(summary=agg.finalize(), pages=[page])

    monkeypatch.setattr(cli_module, "start_scan", _scan)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "A11yScout" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "scan.json"
    cfg_file.write_text(json.dumps({"start_url": "https://example.com", "max_depth": 1}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["start_url"] == "https://example.com"
    assert data["max_depth"] == 1
    assert data["standard"] == "WCAG2AA"


def test_show_config_url_argument():
    result = CliRunner().invoke(cli, ["config", "https://example.org"])
    assert result.exit_code == 0
    assert json.loads(result.output)["start_url"] == "https://example.org"


def test_scan_writes_reports(tmp_path, fake_scan):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["scan", "https://example.com", "-d", "2", "-o", "out", "--exclude", "admin,login", "--include-warnings"],
    )
    assert result.exit_code == 0, result.output

    cfg = fake_scan["cfg"]
    assert cfg.max_depth == 2
    assert cfg.exclude == ["admin", "login"]
    assert cfg.include_warnings is True
    assert cfg.include_notices is False

    assert (tmp_path / "out" / "index.html").is_file()
    assert (tmp_path / "out" / "pages" / "home" / "report.html").is_file()
    summary = json.loads((tmp_path / "out" / "summary.json").read_text(encoding="utf-8"))
    assert summary["totalPages"] == 1
    assert "Pages analyzed: 1" in result.output


def test_scan_json_file(tmp_path, fake_scan):
    out = tmp_path / "custom.json"
    result = CliRunner().invoke(cli, ["scan", "https://example.com", "--json", str(out)])
    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["startUrl"] == "https://example.com"


def test_scan_options_override_config_file(tmp_path, fake_scan):
    cfg_file = tmp_path / "a11y.yaml"
    cfg_file.write_text("start_url: https://example.com\nconcurrency: 7\nmax_depth: 4\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "scan", "-d", "1"])
    assert result.exit_code == 0
    assert fake_scan["cfg"].concurrency == 7
    assert fake_scan["cfg"].max_depth == 1


def test_scan_without_pages(monkeypatch, tmp_path):
    async def empty(cfg):
        return ScanResult(summary=ReportAggregator().finalize())

    monkeypatch.setattr(cli_module, "start_scan", empty)
    result = CliRunner().invoke(cli, ["scan", "https://example.com"])
    assert result.exit_code == 0
    assert "No pages were successfully analyzed." in result.output
    assert (tmp_path / "accessibility-reports" / "index.html").is_file()


def test_scan_invalid_url():
    result = CliRunner().invoke(cli, ["scan", "not-a-url"])
    assert result.exit_code == 1
    assert "Некорректная конфигурация" in result.output


def test_scan_setup_error(monkeypatch):
    async def broken(cfg):
        raise SetupError("pa11y", "command not found")

    monkeypatch.setattr(cli_module, "start_scan", broken)
    result = CliRunner().invoke(cli, ["scan", "https://example.com"])
    assert result.exit_code == 1
    assert "pa11y unavailable" in result.output


def test_scan_timeout(monkeypatch):
    async def slow(cfg):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_scan", slow)

    result = CliRunner().invoke(cli, ["scan", "https://example.com", "--scan-timeout", "0.1"])
    assert result.exit_code != 0
    assert "не завершён" in result.output
