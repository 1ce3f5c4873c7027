"""CLI entry point for the release watcher."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from release_watcher.adapters.llm import QwenClient
from release_watcher.adapters.releases import GitHubReleaseProvider
from release_watcher.adapters.report import MarkdownReportWriter
from release_watcher.adapters.sources import GitHubStarredSource
from release_watcher.config import Settings, get_settings
from release_watcher.core import ConfigurationError, NoveltyFilter, SQLiteStateStore, StateStore
from release_watcher.scheduler import DailyScheduler
from release_watcher.use_cases import ReleaseWatchService, ReportService, check_updates

logger = logging.getLogger("release_watcher")


def main(
    once: bool = typer.Option(False, "--once", help="Run a single check and exit"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config"),
    output: Optional[Path] = typer.Option(None, "--output", help="Directory for reports"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
    show_state: bool = typer.Option(False, "--show-state", help="Print last-seen releases and exit"),
) -> None:
    """Watch starred GitHub repositories for new releases and summarize them."""
    configure_logging(debug)

    settings = get_settings(config)
    if output is not None:
        settings.paths.reports_dir = output

    if show_state:
        print_state(SQLiteStateStore(settings.state_db))
        return

    try:
        settings.validate()
    except ConfigurationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    asyncio.run(async_run(settings, once))


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def print_state(store: StateStore) -> None:
    try:
        entries = store.entries()
    finally:
        store.close()

    if not entries:
        print("No releases recorded yet.")
        return
    for entry in entries:
        print(f"{entry.last_published_at}  {entry.identifier}")


def build_services(settings: Settings, store: StateStore) -> tuple[ReleaseWatchService, ReportService]:
    """Wire adapters into the watch and report services."""
    watch_service = ReleaseWatchService(
        source=GitHubStarredSource(
            token=settings.github_token,
            page_size=settings.monitoring.page_size,
        ),
        release_provider=GitHubReleaseProvider(token=settings.github_token),
        llm_client=QwenClient(settings),
        novelty_filter=NoveltyFilter(store),
        max_concurrency=settings.monitoring.max_concurrency,
        record_seen_on_summary_failure=settings.monitoring.record_seen_on_summary_failure,
    )
    report_service = ReportService(
        report_writer=MarkdownReportWriter(model_name=settings.qwen_model),
        output_dir=settings.reports_dir,
    )
    return watch_service, report_service


async def async_run(settings: Settings, once: bool) -> None:
    """Async implementation of run command."""
    print("\n" + "=" * 70)
    print("🚀 GITHUB RELEASE WATCHER")
    print("=" * 70)
    print(f"  • State: {settings.state_db}")
    print(f"  • Reports: {settings.reports_dir}")
    print(f"  • Model: {settings.qwen_model}")
    if not once:
        print(f"  • Daily check at {settings.schedule_time.strftime('%H:%M')}")
    print()

    store = SQLiteStateStore(settings.state_db)
    try:
        watch_service, report_service = build_services(settings, store)

        async def job() -> None:
            logger.info("🔍 Checking starred repositories for new releases...")
            await check_updates(watch_service, report_service)

        if once:
            await job()
            return

        scheduler = DailyScheduler(job, at=settings.schedule_time, run_immediately=True)
        await scheduler.serve()
    finally:
        store.close()


if __name__ == "__main__":
    app()
