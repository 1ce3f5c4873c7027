"""Report adapters."""

from release_watcher.adapters.report.markdown_writer import MarkdownReportWriter

__all__ = ["MarkdownReportWriter"]
