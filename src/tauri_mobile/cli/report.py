"""Rendering of init reports (action requests and victory messages)."""

from __future__ import annotations

from tauri_mobile.cli.console import console
from tauri_mobile.core.models import Report, ReportKind


def _escape_markup(text: str) -> str:
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


class RichReporter:
    """Concrete :class:`~tauri_mobile.core.protocols.Reporter` for the terminal."""

    def emit(self, report: Report) -> None:
        headline = _escape_markup(report.headline)
        body = _escape_markup(report.body)

        if report.kind is ReportKind.ACTION_REQUEST:
            console.print(
                f"[bold yellow]Action request:[/bold yellow] {headline}",
                plain=f"Action request: {report.headline}",
            )
        else:
            console.print(
                f"[bold green]{headline}[/bold green]",
                plain=report.headline,
            )
        if report.body:
            console.print(f"  {body}", plain=f"  {report.body}")
