# a11y_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта A11yScout.

Сериализация SiteSummary и метаданных обхода в файл.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from a11y_scout.aggregator import SiteSummary


def render_json(
    summary: SiteSummary,
    config: Any,
    output_path: Path | str,
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Сохраняет сводку в формате JSON по указанному пути.

    :param summary: объект SiteSummary
    :param config: CrawlConfig (origin, стандарт, метка проекта)
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "origin": config.origin,
        "startUrl": config.start_url,
        "standard": config.standard,
        "projectKey": config.project_key,
        "summary": config.summary,
        "generatedAt": (generated_at or datetime.now()).isoformat(timespec="seconds"),
        **summary.to_dict(),
    }

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
