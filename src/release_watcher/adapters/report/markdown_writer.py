"""Markdown report writer."""

from datetime import date, datetime, timezone

from release_watcher.core import ReportWriter, UpdateEntry


class MarkdownReportWriter(ReportWriter):
    """Render accepted updates into a dated markdown document."""

    def __init__(self, model_name: str = "") -> None:
        self.model_name = model_name

    def filename(self, run_date: date) -> str:
        return f"{run_date.isoformat()}-github-release-summary.md"

    def render(self, updates: list[UpdateEntry], run_date: date, generated_at: datetime) -> str:
        """Generate markdown report."""
        lines = [
            f"# {run_date.isoformat()} GitHub Release Summary",
            "",
            f"Found **{len(updates)}** project(s) with a new release",
            f"Generated at: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "---",
            "",
        ]

        for update in updates:
            lines.extend(self._format_entry(update))

        footer = "*Summarized automatically"
        if self.model_name:
            footer += f" by {self.model_name}"
        lines.append(footer + "*")
        lines.append("")

        return "\n".join(lines)

    def _format_entry(self, update: UpdateEntry) -> list[str]:
        """Format single update block."""
        release = update.release
        return [
            f"### [{release.identifier}]({update.repository_url})",
            f"- **Version:** {release.tag or 'n/a'}",
            f"- **Release name:** {release.title or 'n/a'}",
            f"- **Published:** {format_published(release.published_at)}",
            f"- **Link:** [View full release]({release.url})",
            "",
            "**Summary:**",
            update.summary,
            "",
            "---",
            "",
        ]


def format_published(published_at: str) -> str:
    """Render a UTC ISO timestamp in local time, falling back to the raw value."""
    try:
        moment = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    except ValueError:
        return published_at
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S")
