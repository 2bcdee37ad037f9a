"""Report assembly and export helpers (plain text, CSV, PDF and charts)."""

from __future__ import annotations

import io
import textwrap
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from matplotlib import pyplot as plt
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .analysis import analyze_responses, key_findings, overall_score, report_recommendations
from .constants import ALL_CITIES, ANALYSIS_CATEGORIES, CATEGORY_DISPLAY, RATING_RANGE
from .models import MetricReading, ReportDocument, SurveyResponse

_PDF_MARGIN = 54  # 0.75 inches
TREND_WEEKS = ("Week 1", "Week 2", "Week 3", "Week 4")
CSV_COLUMNS = ["Metric", "Value", "Unit", "Change", "Timestamp", "Source"]


def _format_score(score: float) -> str:
    return f"{score:g}"


def _category_heading(category: str) -> str:
    return category.upper().replace("-", " ", 1)


def build_report(
    location: str,
    responses: Iterable[SurveyResponse],
    generated_at: Optional[datetime] = None,
) -> ReportDocument:
    """Compose the report for ``location`` ("All Cities" keeps every response)."""

    selected = [
        response
        for response in responses
        if location == ALL_CITIES or response.location == location
    ]
    categories = analyze_responses(selected, view="report")
    return ReportDocument(
        title=f"Urban Planning Analysis Report - {location}",
        generated_at=generated_at or datetime.now(timezone.utc),
        location=location,
        total_surveys=len(selected),
        average_score=overall_score(categories),
        key_findings=tuple(key_findings(categories)),
        recommendations=tuple(report_recommendations(categories)),
        categories=tuple(categories),
    )


def report_text(document: ReportDocument) -> str:
    generated = document.generated_at
    lines = [
        document.title,
        f"Generated: {generated.month}/{generated.day}/{generated.year}",
        f"Location: {document.location}",
        "",
        "EXECUTIVE SUMMARY",
        "================",
        f"Total Surveys: {document.total_surveys}",
        f"Average Score: {_format_score(document.average_score)}/5",
        "",
        "Key Findings:",
    ]
    lines.extend(f"• {finding}" for finding in document.key_findings)
    lines.extend(["", "Recommendations:"])
    lines.extend(f"• {recommendation}" for recommendation in document.recommendations)
    lines.extend(["", "CATEGORY ANALYSIS", "================="])
    for category in document.categories:
        lines.extend(
            [
                "",
                _category_heading(category.category),
                f"Score: {_format_score(category.score)}/5",
                f"Trend: {category.trend}",
                f"Priority: {category.priority}",
                "Insights:",
            ]
        )
        lines.extend(f"  • {insight}" for insight in category.insights)
    return "\n".join(lines) + "\n"


def report_filename(generated_at: datetime) -> str:
    return f"urban-planning-report-{generated_at.strftime('%Y-%m-%d')}.txt"


def report_chart_frames(
    responses: Sequence[SurveyResponse], rng: Optional[np.random.Generator] = None
) -> Dict[str, pd.DataFrame]:
    """Return the weekly trend frame (sample data) and the performance frame.

    The performance score is the unrounded mean of numeric answers.
    """

    generator = rng if rng is not None else np.random.default_rng()
    trend_rows = []
    for week in TREND_WEEKS:
        row: Dict[str, object] = {"week": week}
        for category in ANALYSIS_CATEGORIES:
            row[category] = generator.random() * 2 + 2.5
        trend_rows.append(row)

    performance_rows = []
    for category in ANALYSIS_CATEGORIES:
        values = [
            float(answer.value)
            for response in responses
            for answer in response.answers_for(category)
            if answer.is_numeric
        ]
        performance_rows.append(
            {
                "category": category.replace("-", " ", 1),
                "score": sum(values) / len(values) if values else 0.0,
                "responses": len(values),
            }
        )
    return {
        "trend": pd.DataFrame(trend_rows, columns=["week", *ANALYSIS_CATEGORIES]),
        "performance": pd.DataFrame(performance_rows, columns=["category", "score", "responses"]),
    }


def category_radar_png(document: ReportDocument) -> bytes:
    labels = [CATEGORY_DISPLAY[item.category] for item in document.categories]
    high = RATING_RANGE[1]
    values = [max(0.0, min(float(high), item.score)) for item in document.categories]
    angles = np.linspace(0, 2 * np.pi, len(labels), endpoint=False).tolist()
    values += values[:1]
    angles += angles[:1]

    fig = plt.figure(figsize=(3.6, 3.6), dpi=150)
    ax = fig.add_subplot(111, polar=True)
    ax.plot(angles, values, color="#1d4ed8", linewidth=2)
    ax.fill(angles, values, color="#3b82f6", alpha=0.25)
    ax.set_thetagrids(np.degrees(angles[:-1]), labels)
    ax.set_ylim(0, high)
    ax.set_title("Category scores", pad=20, fontsize=12, fontweight="bold")
    ax.grid(color="#cbd5f5", linestyle="--", linewidth=0.6)
    fig.tight_layout()

    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight")
    plt.close(fig)
    buffer.seek(0)
    return buffer.read()


def _render_lines(
    can: canvas.Canvas,
    lines: list[str],
    margin: int,
    page_height: int,
    start_y: int,
    line_height: int,
) -> int:
    y = start_y
    for line in lines:
        if y < margin + line_height:
            can.showPage()
            can.setFont("Helvetica", 11)
            y = page_height - margin
        can.drawString(margin, y, line)
        y -= line_height
    return y


def _section(can: canvas.Canvas, title: str, margin: int, width: float, y: int, line_height: int) -> int:
    can.setFont("Helvetica-Bold", 14)
    can.drawString(margin, y, title)
    y -= line_height
    can.setLineWidth(0.5)
    can.line(margin, y, width - margin, y)
    y -= int(1.2 * line_height)
    can.setFont("Helvetica", 11)
    return y


def _wrapped(prefix: str, text: str, width: int = 90) -> list[str]:
    return textwrap.wrap(text, width=width, initial_indent=prefix, subsequent_indent=" " * len(prefix)) or [prefix]


def generate_pdf_report(document: ReportDocument, chart_png: Optional[bytes] = None) -> bytes:
    buffer = io.BytesIO()
    can = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter
    margin = _PDF_MARGIN
    page_height = int(height)
    y = page_height - margin
    line_height = 14

    can.setFont("Helvetica-Bold", 16)
    can.drawString(margin, y, document.title)
    can.setLineWidth(1)
    can.line(margin, y - 4, width - margin, y - 4)
    y -= 2 * line_height
    can.setFont("Helvetica", 10)
    can.drawString(margin, y, f"Generated: {document.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    y -= int(1.5 * line_height)

    y = _section(can, "Executive Summary", margin, width, y, line_height)
    summary = [
        f"Location: {document.location}",
        f"Total Surveys: {document.total_surveys}",
        f"Average Score: {_format_score(document.average_score)}/5",
        "Key Findings:",
    ]
    for finding in document.key_findings:
        summary.extend(_wrapped("• ", finding))
    summary.append("Recommendations:")
    for recommendation in document.recommendations:
        summary.extend(_wrapped("• ", recommendation))
    y = _render_lines(can, summary, margin, page_height, y, line_height)
    y -= line_height

    y = _section(can, "Category Analysis", margin, width, y, line_height)
    details: list[str] = []
    for category in document.categories:
        details.append(
            f"{CATEGORY_DISPLAY[category.category]} · Score {_format_score(category.score)}/5"
            f" · Trend {category.trend} · Priority {category.priority}"
        )
        for insight in category.insights:
            details.extend(_wrapped("  • ", insight))
        for recommendation in category.recommendations:
            details.extend(_wrapped("  - ", recommendation))
        details.append("")
    y = _render_lines(can, details, margin, page_height, y, line_height)

    if chart_png:
        if y < margin + 260:
            can.showPage()
            y = page_height - margin
        reader = ImageReader(io.BytesIO(chart_png))
        img_w, img_h = reader.getSize()
        scale = min((width - 2 * margin) / 2 / img_w, 220 / img_h)
        draw_w = img_w * scale
        draw_h = img_h * scale
        can.drawImage(reader, margin, y - draw_h, width=draw_w, height=draw_h, preserveAspectRatio=True)
        can.setFont("Helvetica", 9)
        can.drawString(margin, y - draw_h - 12, "Figure · Category score radar chart")

    can.save()
    buffer.seek(0)
    return buffer.read()


def metric_csv(reading: MetricReading) -> str:
    row = [
        reading.title,
        reading.value,
        reading.unit,
        reading.change,
        reading.timestamp,
        f"{reading.source.name} {reading.source.dataset}",
    ]
    frame = pd.DataFrame([row], columns=CSV_COLUMNS)
    return frame.to_csv(index=False, lineterminator="\n")


def metric_csv_filename(title: str) -> str:
    return "-".join(title.lower().split()) + "-data.csv"


__all__ = [
    "TREND_WEEKS",
    "CSV_COLUMNS",
    "build_report",
    "report_text",
    "report_filename",
    "report_chart_frames",
    "category_radar_png",
    "generate_pdf_report",
    "metric_csv",
    "metric_csv_filename",
]
