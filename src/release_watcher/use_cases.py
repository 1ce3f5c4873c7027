"""Business logic use cases."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from release_watcher.core import (
    EnumerationError,
    LLMClient,
    NoveltyFilter,
    ReleaseFetchError,
    ReleaseProvider,
    ReleaseRecord,
    ReportWriter,
    SummarizationError,
    UpdateEntry,
    WatchedItem,
    WatchedItemSource,
)

logger = logging.getLogger(__name__)

SUMMARY_FAILED_TEXT = "(AI summary failed)"


@dataclass
class RunStats:
    """Counters for one pipeline run."""

    watched: int = 0
    new_releases: int = 0
    no_release: int = 0
    already_seen: int = 0
    fetch_failures: int = 0
    summary_failures: int = 0
    enumeration_failed: bool = False


class ReleaseWatchService:
    """Enumerate watched repositories and collect their new releases."""

    def __init__(
        self,
        source: WatchedItemSource,
        release_provider: ReleaseProvider,
        llm_client: LLMClient,
        novelty_filter: NoveltyFilter,
        max_concurrency: int = 4,
        record_seen_on_summary_failure: bool = True,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.source = source
        self.release_provider = release_provider
        self.llm_client = llm_client
        self.novelty_filter = novelty_filter
        self.max_concurrency = max_concurrency
        self.record_seen_on_summary_failure = record_seen_on_summary_failure
        self.last_stats = RunStats()

    async def run(self) -> list[UpdateEntry]:
        """Run one polling cycle.

        Returns the accepted updates in enumeration order. Per-repository
        failures are logged and skipped; only a state store failure raises.
        """
        stats = RunStats()
        self.last_stats = stats

        try:
            identifiers = await self.source.list_watched_items()
        except EnumerationError as e:
            stats.enumeration_failed = True
            logger.error("Listing watched repositories failed, skipping this run: %s", e)
            return []

        if not identifiers:
            logger.warning("No watched repositories found (nothing starred, or token lacks permission)")
            return []

        stats.watched = len(identifiers)
        logger.info("Checking %d watched repositories", len(identifiers))

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def handle_one(identifier: WatchedItem) -> Optional[UpdateEntry]:
            async with semaphore:
                return await self._process_item(identifier, stats)

        tasks = [asyncio.create_task(handle_one(i)) for i in identifiers]
        try:
            # gather keeps input order regardless of completion order
            results = await asyncio.gather(*tasks)
        except BaseException:
            # A failed run must not keep recording releases it will never report
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        updates = [entry for entry in results if entry is not None]

        logger.info(
            "Run finished: %d checked, %d new, %d without release, %d already seen, "
            "%d fetch failures, %d summary failures",
            stats.watched, stats.new_releases, stats.no_release, stats.already_seen,
            stats.fetch_failures, stats.summary_failures,
        )
        return updates

    async def _process_item(self, identifier: WatchedItem, stats: RunStats) -> Optional[UpdateEntry]:
        try:
            release = await self.release_provider.fetch_latest_release(identifier)
        except ReleaseFetchError as e:
            stats.fetch_failures += 1
            logger.warning("Fetching latest release failed, skipping: %s", e)
            return None
        except Exception as e:
            stats.fetch_failures += 1
            logger.exception("Unexpected error fetching %s: %s", identifier, e)
            return None

        if release is None:
            stats.no_release += 1
            return None

        if not self.novelty_filter.is_novel(identifier, release.published_at):
            stats.already_seen += 1
            return None

        logger.info("New release: %s %s", identifier, release.tag)
        summary, summary_ok = await self._summarize(release)
        if not summary_ok:
            stats.summary_failures += 1

        entry = UpdateEntry(release=release, summary=summary, summary_ok=summary_ok)

        if summary_ok or self.record_seen_on_summary_failure:
            self.novelty_filter.record_seen(identifier, release.published_at)
        else:
            logger.info("%s left unrecorded so the summary is retried next run", identifier)

        stats.new_releases += 1
        return entry

    async def _summarize(self, release: ReleaseRecord) -> tuple[str, bool]:
        """Summarize release notes, substituting fallback text on failure."""
        try:
            return await self.llm_client.summarize_release(release), True
        except SummarizationError as e:
            logger.error("Summarization failed: %s", e)
        except Exception as e:
            logger.exception("Unexpected summarization error for %s: %s", release.identifier, e)
        return SUMMARY_FAILED_TEXT, False


class ReportService:
    """Write the dated report for a run's updates."""

    def __init__(self, report_writer: ReportWriter, output_dir: Path) -> None:
        self.report_writer = report_writer
        self.output_dir = output_dir

    def publish(
        self,
        updates: list[UpdateEntry],
        run_date: Optional[date] = None,
        generated_at: Optional[datetime] = None,
    ) -> Optional[Path]:
        """Save the report; returns its path, or None when there is nothing new.

        A later run on the same date is appended to that date's report, since
        the releases of the earlier run are already recorded as seen.
        """
        if not updates:
            logger.info("No new releases today, no report written")
            return None

        run_date = run_date or date.today()
        generated_at = generated_at or datetime.now()

        content = self.report_writer.render(updates, run_date, generated_at)
        output_path = self.output_dir / self.report_writer.filename(run_date)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if output_path.exists():
            with open(output_path, "a", encoding="utf-8") as f:
                f.write("\n" + content)
            logger.info("Report appended to %s (%d updates)", output_path, len(updates))
        else:
            output_path.write_text(content, encoding="utf-8")
            logger.info("Report saved to %s (%d updates)", output_path, len(updates))
        return output_path


async def check_updates(watch_service: ReleaseWatchService, report_service: ReportService) -> Optional[Path]:
    """One full cycle: poll releases, then write the report."""
    updates = await watch_service.run()
    return report_service.publish(updates)
