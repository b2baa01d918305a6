"""
Expiry reaper schedule.

Two independent sweeps run on one interval: stock holds past the TTL go
back to Ready, and seller funding locks past the TTL are cleared. A failing
sweep is logged and retried on the next tick; it never stops the scheduler.
"""

import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings
from django.db import close_old_connections

from apps.inventory.services import sweep_expired_holds
from apps.wallets.services import sweep_expired_funding_locks

logger = logging.getLogger(__name__)


def run_job(name, func):
    """Run one sweep, logging instead of raising."""
    close_old_connections()
    try:
        count = func()
    except Exception:
        logger.exception("Reaper job %s failed", name)
        return None
    finally:
        close_old_connections()

    if count:
        logger.info("Reaper job %s released %d rows", name, count)
    else:
        logger.debug("Reaper job %s: nothing to release", name)
    return count


def sweep_stock_holds():
    return run_job('stock_holds', sweep_expired_holds)


def sweep_funding_locks():
    return run_job('funding_locks', sweep_expired_funding_locks)


def run_sweeps():
    """Run both sweeps once."""
    return {
        'stock_holds': sweep_stock_holds(),
        'funding_locks': sweep_funding_locks(),
    }


def build_scheduler(scheduler_class=BlockingScheduler):
    """Scheduler with both sweeps registered every REAPER_INTERVAL_MINUTES."""
    scheduler = scheduler_class(
        job_defaults={
            'coalesce': True,
            'max_instances': 1,
            'misfire_grace_time': 60,
        },
        timezone='UTC',
    )
    interval = settings.REAPER_INTERVAL_MINUTES

    scheduler.add_job(
        sweep_stock_holds,
        trigger=IntervalTrigger(minutes=interval),
        id='sweep_expired_holds',
        name='Release expired stock holds',
        replace_existing=True,
    )
    scheduler.add_job(
        sweep_funding_locks,
        trigger=IntervalTrigger(minutes=interval),
        id='sweep_expired_funding_locks',
        name='Release stale funding locks',
        replace_existing=True,
    )
    return scheduler
