"""Watch company YAML files and regenerate application data on change.

Polls modification times under the tailor base directory. Bursts of
changes are coalesced by a :class:`Debouncer`; regeneration runs one at a
time, and a change arriving mid-run queues exactly one follow-up run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from cv_tailor.config import AppConfig
from cv_tailor.pipeline.orchestrator import check_tailor_context, generate_application_data
from cv_tailor.pipeline.result import Result, chain, try_catch_async

logger = logging.getLogger(__name__)

Snapshot = dict[Path, float]


class Debouncer:
    """Call ``callback`` once ``delay`` seconds after the last ``trigger``."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self._task: asyncio.Task | None = None

    def trigger(self) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._fire())

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fire(self) -> None:
        await asyncio.sleep(self.delay)
        self.callback()


class SingleFlight:
    """Run ``job`` at most once at a time, with one trailing re-run."""

    def __init__(self, job: Callable[[], object]):
        self.job = job
        self.running = False
        self._rerun = False
        self._task: asyncio.Task | None = None

    def request(self) -> None:
        if self.running:
            self._rerun = True
            return
        self.running = True
        self._task = asyncio.create_task(self._loop())

    async def _loop(self) -> None:
        try:
            while True:
                self._rerun = False
                await self.job()
                if not self._rerun:
                    break
        finally:
            self.running = False

    async def wait(self) -> None:
        if self._task is not None:
            await self._task


def snapshot(base: Path) -> Snapshot:
    """Modification times of ``<base>/<company>/*.yaml``."""
    if not base.is_dir():
        return {}
    stamps: Snapshot = {}
    for path in base.glob("*/*.yaml"):
        try:
            stamps[path] = path.stat().st_mtime
        except OSError:
            continue  # removed between glob and stat
    return stamps


def changed_companies(before: Snapshot, after: Snapshot) -> set[str]:
    changed = {p for p in after if before.get(p) != after[p]}
    changed |= set(before) - set(after)
    return {p.parent.name for p in changed}


class TailorWatcher:
    def __init__(
        self,
        settings: AppConfig,
        regenerate: Callable[[str], Result] | None = None,
    ):
        self.settings = settings
        self.base = settings.paths.tailor_base_path
        self.regenerate = regenerate or (lambda company: generate_application_data(company, settings))
        self.pending: set[str] = set()
        self.runner = SingleFlight(self.run_pending)
        self.debouncer = Debouncer(settings.watch.debounce_ms / 1000, self.runner.request)

    def active_company(self) -> str | None:
        """Company named in the context file, or ``None`` to watch all."""
        result = check_tailor_context(self.settings, strict=True)
        if not result.success:
            logger.warning("%s; watching all companies", result.error)
            return None
        for warning in result.data.warnings:
            logger.warning(warning)
        return result.data.data.active_company

    def notice(self, companies: set[str]) -> None:
        active = self.active_company()
        relevant = {c for c in companies if active is None or c == active}
        if not relevant:
            return
        self.pending |= relevant
        self.debouncer.trigger()

    async def run_pending(self) -> None:
        companies, self.pending = sorted(self.pending), set()
        for company in companies:
            logger.info("Regenerating data for %s", company)
            result = chain(
                await try_catch_async(
                    lambda: asyncio.to_thread(self.regenerate, company),
                    f"Regeneration failed for {company}",
                ),
                lambda inner: inner,
            )
            if result.success:
                logger.info("Data regenerated for %s", company)
            else:
                logger.error("%s\n%s", result.error, result.details or "")
                logger.info("Still watching; fix the data and save again to retry")

    async def watch(self, stop: asyncio.Event | None = None) -> None:
        stop = stop or asyncio.Event()
        interval = self.settings.watch.poll_interval
        logger.info(
            "Watching %s (debounce %dms)", self.base, self.settings.watch.debounce_ms
        )
        previous = snapshot(self.base)
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
            current = snapshot(self.base)
            companies = changed_companies(previous, current)
            previous = current
            if companies:
                logger.debug("Changed: %s", ", ".join(sorted(companies)))
                self.notice(companies)

        self.debouncer.cancel()
        await self.runner.wait()
