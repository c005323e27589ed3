"""
scheduler.py
------------
Timer trigger: runs the fetch-and-store job every N hours (48 by default).
There is no caller to report to, so outcomes only show up in the logs.

    python -m spacenews.scheduler            # run now, then every 48h
    python -m spacenews.scheduler --once     # single run, exit code 0/1

The API process runs the same timer on a background thread (API_SCHEDULER=true),
which keeps both triggers behind one run lock. Running this module as well
starts a second, uncoordinated process.
"""

from __future__ import annotations

import argparse
import logging
import threading
import time

import schedule
from rich.console import Console

from spacenews.pipeline import SpaceNewsRunner, create_runner

console = Console()
logger = logging.getLogger(__name__)


def scheduled_fetch(runner: SpaceNewsRunner) -> bool:
    try:
        runner.run()
    except Exception:
        logger.exception("Error fetching space news on schedule")
        return False
    logger.info("Space news scheduled fetch completed.")
    return True


def schedule_job(runner: SpaceNewsRunner, interval_hours: int,
                 scheduler: schedule.Scheduler = schedule.default_scheduler) -> schedule.Job:
    return scheduler.every(interval_hours).hours.do(scheduled_fetch, runner)


class BackgroundSchedule:
    """Timer that runs pending jobs on a daemon thread until stopped.

    Used by the API process so both triggers share one runner.
    """

    def __init__(self, runner: SpaceNewsRunner, interval_hours: int, poll_seconds: float = 1.0):
        self.scheduler = schedule.Scheduler()
        self.job = schedule_job(runner, interval_hours, scheduler=self.scheduler)
        self.poll_seconds = poll_seconds
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, name="spacenews-schedule", daemon=True)

    def _loop(self) -> None:
        while not self._stop.wait(self.poll_seconds):
            self.scheduler.run_pending()

    def start(self) -> "BackgroundSchedule":
        self._thread.start()
        logger.info(f"Background space news fetch scheduled every {self.job.interval}h")
        return self

    def stop(self) -> None:
        self._stop.set()
        self._thread.join()
        self.scheduler.clear()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()


def run_forever(runner: SpaceNewsRunner, interval_hours: int) -> None:
    scheduled_fetch(runner)
    schedule_job(runner, interval_hours)
    logger.info(f"Scheduled space news fetch every {interval_hours}h")
    while True:
        schedule.run_pending()
        time.sleep(1)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Fetch space news into the document store")
    parser.add_argument("--once", action="store_true", help="run a single fetch and exit")
    parser.add_argument("--interval-hours", type=int, default=None,
                        help="hours between runs (default: FETCH_INTERVAL_HOURS or 48)")
    args = parser.parse_args(argv)

    runner = create_runner()
    if args.once:
        ok = scheduled_fetch(runner)
        if ok:
            console.print("[green]Space news fetched and stored.[/green]")
        else:
            console.print("[red]Error fetching space news; see logs/spacenews.log[/red]")
        return 0 if ok else 1

    try:
        run_forever(runner, args.interval_hours or runner.settings.fetch_interval_hours)
    except KeyboardInterrupt:
        console.print("Stopped.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
