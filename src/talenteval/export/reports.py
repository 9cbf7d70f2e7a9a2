"""
Report export.

Pure transformations of already-fetched records into downloadable files:
paginated PDFs (reportlab) and multi-sheet workbooks (openpyxl). Nothing in
this module touches the network or the database.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from talenteval.core.errors import ValidationFailureError

REPORT_TITLE = "Talent Evaluation Report"
MAX_SCORE = 5

# Vertical positions are millimetres from the top edge of an A4 page
TOP_MARGIN = 20
LEFT_MARGIN = 20
INDENT = 30
PAGE_BREAK_Y = 250

PDF_MEDIA_TYPE = "application/pdf"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class StudentReport:
    """A student with the evaluations to report on."""

    student: Any
    evaluations: Sequence[Any] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryAverage:
    category: str
    average: float


@dataclass
class TeamStats:
    total_students: int
    total_evaluations: int
    average_score: float
    category_averages: list[CategoryAverage] = field(default_factory=list)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    media_type: str


# ============================================================================
# Scores and filenames
# ============================================================================


def calculate_average(scores: Mapping[str, float]) -> float:
    """Mean of all scores, rounded to two decimals. No scores gives 0.0."""
    values = list(scores.values())
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def format_score(value: float) -> str:
    return f"{value:.2f}"


def criterion_label(key: str) -> str:
    """Display label of a criterion key: the part after its first '-'."""
    _, sep, rest = key.partition("-")
    return rest if sep and rest else key


def report_filename(subject: str | None, kind: str, on: date, ext: str) -> str:
    """Build `{subject}_{kind}_{ISO-date}.{ext}`; a missing subject is left out."""
    subject_slug = re.sub(r"\s+", "_", subject.strip()) if subject else ""
    parts = [part for part in (subject_slug, kind, on.isoformat()) if part]
    return f"{'_'.join(parts)}.{ext}"


def _format_date(value: datetime | date | None) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


# ============================================================================
# Team statistics
# ============================================================================


def compute_team_stats(students: Sequence[Any], evaluations: Iterable[Any]) -> TeamStats:
    """Totals, overall average and per-criterion averages across evaluations."""
    evaluations = list(evaluations)
    per_evaluation = [calculate_average(e.scores) for e in evaluations if e.scores]

    by_category: dict[str, list[float]] = {}
    for evaluation in evaluations:
        for key, score in evaluation.scores.items():
            by_category.setdefault(criterion_label(key), []).append(score)

    return TeamStats(
        total_students=len(students),
        total_evaluations=len(evaluations),
        average_score=round(sum(per_evaluation) / len(per_evaluation), 2) if per_evaluation else 0.0,
        category_averages=[
            CategoryAverage(category, round(sum(values) / len(values), 2))
            for category, values in sorted(by_category.items())
        ],
    )


# ============================================================================
# PDF
# ============================================================================


class PdfReport:
    """Canvas wrapper that writes lines top-down and counts pages."""

    def __init__(self) -> None:
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=A4)
        self._page_width, self._page_height = A4
        self.y_pos = TOP_MARGIN
        self.pages = 1

    def text(self, x: float, line: str, size: int = 12, advance: float = 7) -> None:
        self._canvas.setFont("Helvetica", size)
        self._canvas.drawString(x * mm, self._page_height - self.y_pos * mm, line)
        self.y_pos += advance

    def centered(self, line: str, size: int, advance: float) -> None:
        self._canvas.setFont("Helvetica-Bold", size)
        self._canvas.drawCentredString(self._page_width / 2, self._page_height - self.y_pos * mm, line)
        self.y_pos += advance

    def skip(self, amount: float) -> None:
        self.y_pos += amount

    def break_if_past(self, threshold: float = PAGE_BREAK_Y) -> None:
        """Start a new page when the write position is past the threshold."""
        if self.y_pos > threshold:
            self._canvas.showPage()
            self.pages += 1
            self.y_pos = TOP_MARGIN

    def header(self, report_type: str, on: date) -> None:
        self.centered(REPORT_TITLE, 20, 15)
        self.text(LEFT_MARGIN, f"Report Type: {report_type}", advance=10)
        self.text(LEFT_MARGIN, f"Generated on: {on.isoformat()}", advance=15)

    def render(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()


def render_student_pdf(report: StudentReport, on: date) -> PdfReport:
    """Lay out a student progress report; returns the unsaved document."""
    pdf = PdfReport()
    pdf.header("Student Progress", on)

    student = report.student
    if student is not None:
        pdf.text(LEFT_MARGIN, "Student Information", size=16, advance=10)
        pdf.text(LEFT_MARGIN, f"Name: {student.name or ''}")
        pdf.text(LEFT_MARGIN, f"Grade: {student.grade or ''}")
        pdf.text(LEFT_MARGIN, f"Activities: {', '.join(student.activities)}", advance=15)

    if report.evaluations:
        pdf.text(LEFT_MARGIN, "Evaluation History", size=16, advance=10)

        for evaluation in report.evaluations:
            pdf.break_if_past()
            pdf.text(LEFT_MARGIN, f"Date: {_format_date(evaluation.date)}")
            pdf.text(LEFT_MARGIN, f"Evaluator: {evaluation.evaluator}")
            average = format_score(calculate_average(evaluation.scores))
            pdf.text(LEFT_MARGIN, f"Average Score: {average}/{MAX_SCORE}", advance=10)

            for key, score in evaluation.scores.items():
                pdf.text(INDENT, f"{criterion_label(key)}: {score}/{MAX_SCORE}")
            pdf.skip(10)

    return pdf


def render_team_pdf(stats: TeamStats, on: date) -> PdfReport:
    """Lay out a team performance summary; returns the unsaved document."""
    pdf = PdfReport()
    pdf.header("Team Performance", on)

    pdf.text(LEFT_MARGIN, "Team Performance Summary", size=16, advance=10)
    pdf.text(LEFT_MARGIN, f"Total Students: {stats.total_students}")
    pdf.text(LEFT_MARGIN, f"Total Evaluations: {stats.total_evaluations}")
    pdf.text(
        LEFT_MARGIN, f"Team Average: {format_score(stats.average_score)}/{MAX_SCORE}", advance=15
    )

    if stats.category_averages:
        pdf.text(LEFT_MARGIN, "Category Averages", size=14, advance=10)
        for category in stats.category_averages:
            pdf.break_if_past()
            pdf.text(INDENT, f"{category.category}: {format_score(category.average)}/{MAX_SCORE}")

    return pdf


# ============================================================================
# Workbooks
# ============================================================================


def _write_sheet(ws: Any, title: str, headers: list[str], rows: list[list[Any]]) -> None:
    ws.title = title
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")
    for row in rows:
        ws.append(row)
    for index, header in enumerate(headers, start=1):
        ws.column_dimensions[ws.cell(row=1, column=index).column_letter].width = max(
            12, len(header) + 4
        )


def build_student_workbook(report: StudentReport) -> bytes:
    """Sheets: "Evaluation History" and, when a student is given, "Student Info"."""
    wb = Workbook()

    labels: list[str] = []
    for evaluation in report.evaluations:
        for key in evaluation.scores:
            label = criterion_label(key)
            if label not in labels:
                labels.append(label)

    rows = []
    for evaluation in report.evaluations:
        by_label = {criterion_label(k): v for k, v in evaluation.scores.items()}
        rows.append(
            [
                _format_date(evaluation.date),
                evaluation.evaluator,
                calculate_average(evaluation.scores),
                *[by_label.get(label) for label in labels],
            ]
        )
    _write_sheet(wb.active, "Evaluation History", ["Date", "Evaluator", "Average Score", *labels], rows)

    student = report.student
    if student is not None:
        _write_sheet(
            wb.create_sheet(),
            "Student Info",
            ["Name", "Grade", "Activities"],
            [[student.name or "", student.grade or "", ", ".join(student.activities)]],
        )

    output = BytesIO()
    wb.save(output)
    return output.getvalue()


def build_team_workbook(stats: TeamStats) -> bytes:
    """Sheets: "Team Stats" and "Category Averages"."""
    wb = Workbook()
    _write_sheet(
        wb.active,
        "Team Stats",
        ["Total Students", "Total Evaluations", "Team Average"],
        [[stats.total_students, stats.total_evaluations, stats.average_score]],
    )
    _write_sheet(
        wb.create_sheet(),
        "Category Averages",
        ["Category", "Average"],
        [[c.category, c.average] for c in stats.category_averages],
    )

    output = BytesIO()
    wb.save(output)
    return output.getvalue()


# ============================================================================
# Entry points
# ============================================================================


def export_student_report(report: StudentReport, fmt: str, on: date) -> ExportedFile:
    """Render a student report as "pdf" or "xlsx"."""
    name = getattr(report.student, "name", None)
    if fmt == "pdf":
        content = render_student_pdf(report, on).render()
        media_type = PDF_MEDIA_TYPE
    elif fmt == "xlsx":
        content = build_student_workbook(report)
        media_type = XLSX_MEDIA_TYPE
    else:
        raise ValidationFailureError(f"Unsupported export format: {fmt}")

    return ExportedFile(report_filename(name, "evaluation", on, fmt), content, media_type)


def export_team_report(stats: TeamStats, fmt: str, on: date) -> ExportedFile:
    """Render team statistics as "pdf" or "xlsx"."""
    if fmt == "pdf":
        content = render_team_pdf(stats, on).render()
        media_type = PDF_MEDIA_TYPE
    elif fmt == "xlsx":
        content = build_team_workbook(stats)
        media_type = XLSX_MEDIA_TYPE
    else:
        raise ValidationFailureError(f"Unsupported export format: {fmt}")

    return ExportedFile(report_filename("team", "performance", on, fmt), content, media_type)
