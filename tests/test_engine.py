# File: tests/test_engine.py
import pytest

from a11y_scout.engine import start_scan, write_reports
from a11y_scout.exceptions import SetupError

from .conftest import ROOT, FakeAnalyzer, FakeRenderer, raw_issue


@pytest.mark.asyncio()
async def test_start_scan_collects_pages_and_failures(make_config, tmp_path):
    analyzer = FakeAnalyzer(issues={ROOT: [raw_issue("error")]}, failing={f"{ROOT}/broken"})
    renderer = FakeRenderer({ROOT: ["/ok", "/broken"]})
    cfg = make_config(output_dir=str(tmp_path / "reports"))

    result = await start_scan(cfg, analyzer=analyzer, renderer=renderer)

    assert [p.url for p in result.pages] == [ROOT, f"{ROOT}/ok"]
    assert result.failed_urls == [f"{ROOT}/broken"]
    assert result.summary.total_errors == 1
    assert renderer.closed

    index = write_reports(result, cfg)
    assert index == tmp_path / "reports" / "index.html"
    assert (tmp_path / "reports" / "pages" / "ok" / "report.html").is_file()
    assert (tmp_path / "reports" / "summary.json").is_file()


@pytest.mark.asyncio()
async def test_start_scan_propagates_setup_error(basic_config):
    renderer = FakeRenderer(fail_start=True)
    with pytest.raises(SetupError):
        await start_scan(basic_config, analyzer=FakeAnalyzer(), renderer=renderer)
    assert renderer.closed


@pytest.mark.asyncio()
async def test_start_scan_logs_each_page_as_it_is_analyzed(basic_config, capsys):
    analyzer = FakeAnalyzer(issues={ROOT: [raw_issue("error"), raw_issue("notice")]})
    renderer = FakeRenderer({ROOT: ["/about"]})

    await start_scan(basic_config, analyzer=analyzer, renderer=renderer)

    err = capsys.readouterr().err
    assert f"✓ Analyzed: {ROOT} (1 errors, 0 warnings, 1 notices)" in err
    assert f"✓ Analyzed: {ROOT}/about (0 errors, 0 warnings, 0 notices)" in err


@pytest.mark.asyncio()
async def test_start_scan_passes_custom_progress_hook(basic_config):
    seen = []
    await start_scan(basic_config, analyzer=FakeAnalyzer(), renderer=FakeRenderer(), on_result=seen.append)
    assert [r.url for r in seen] == [ROOT]
