# File: a11y_scout/report/__init__.py
"""a11y_scout.report: генерация отчётов (JSON и HTML), используемая CLI и движком."""

from .html_report import page_slug, render_html
from .json_report import render_json

__all__ = ["render_json", "render_html", "page_slug"]
