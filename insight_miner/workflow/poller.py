"""Detect new datasets and compose a dashboard for each"""
import asyncio
import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..config import settings
from ..exceptions import PlatformError
from ..models import CompositionResult, Dataset
from ..services.platform_client import CumulioClient, get_cumulio_client
from .dashboard_composer import DashboardComposer

logger = logging.getLogger(__name__)


class PollerState(str, Enum):
    """Poller phases"""
    UNINITIALIZED = "uninitialized"  # no baseline listing yet
    STEADY = "steady"


class SeenSet:
    """
    Dataset ids already handled by this process.

    Only ever grows. It lives in memory, so a restart takes a fresh baseline.
    """

    def __init__(self, ids: Iterable[str] = ()):
        self._ids = set(ids)
        self._lock = asyncio.Lock()

    def __contains__(self, dataset_id: str) -> bool:
        return dataset_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def ids(self) -> List[str]:
        return sorted(self._ids)

    async def add_all(self, ids: Iterable[str]) -> List[str]:
        """
        Record dataset ids as seen.

        Returns:
            The ids that were not seen before, in input order
        """
        added = []
        async with self._lock:
            for dataset_id in ids:
                if dataset_id not in self._ids:
                    self._ids.add(dataset_id)
                    added.append(dataset_id)
        return added


class DatasetPoller:
    """Polls the platform for datasets and hands new ones to the composer"""

    def __init__(
        self,
        platform_client: Optional[CumulioClient] = None,
        composer: Optional[DashboardComposer] = None,
        seen: Optional[SeenSet] = None,
        max_concurrency: Optional[int] = None,
        interval: Optional[float] = None
    ):
        self.platform_client = platform_client or get_cumulio_client()
        self.composer = composer or DashboardComposer(platform_client=self.platform_client)
        self.seen = seen if seen is not None else SeenSet()
        self.max_concurrency = max_concurrency or settings.MAX_CONCURRENT_COMPOSITIONS
        self.interval = interval if interval is not None else settings.POLL_INTERVAL_SECONDS
        self.state = PollerState.UNINITIALIZED
        self._tick_lock = asyncio.Lock()

    async def tick(self) -> List[CompositionResult]:
        """
        Run one polling cycle.

        The first successful listing only records a baseline. Later listings
        compose a dashboard for every dataset not seen before. A cycle that
        starts while another one is still running is skipped.

        Returns:
            One result per composition attempted in this cycle
        """
        if self._tick_lock.locked():
            logger.warning("Previous poll is still running, skipping this tick")
            return []

        async with self._tick_lock:
            return await self._poll()

    async def _poll(self) -> List[CompositionResult]:
        if self.state == PollerState.UNINITIALIZED:
            logger.info("Initializing with existing sets")
        else:
            logger.info("Checking for new sets")

        try:
            datasets = await self.platform_client.list_datasets(exclude_ids=self.seen.ids())
        except PlatformError as e:
            logger.error(f"An error occurred while getting the new datasets: {e}")
            return []

        new_ids = await self.seen.add_all(dataset.id for dataset in datasets)

        if self.state == PollerState.UNINITIALIZED:
            self.state = PollerState.STEADY
            logger.info(f"Baseline recorded, {len(self.seen)} existing set(s) will be ignored")
            return []

        if not new_ids:
            return []

        logger.info(f"New sets: {new_ids}")
        pending = {}
        for dataset in datasets:
            pending.setdefault(dataset.id, dataset)
        return await self._compose_all([pending[dataset_id] for dataset_id in new_ids])

    async def _compose_all(self, datasets: List[Dataset]) -> List[CompositionResult]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def compose_one(dataset: Dataset) -> CompositionResult:
            async with semaphore:
                try:
                    return await self.composer.compose(dataset)
                except Exception as e:
                    logger.exception(f"[{dataset.id}] Dashboard composition crashed")
                    return CompositionResult(dataset_id=dataset.id, success=False, error=str(e))

        results = await asyncio.gather(*(compose_one(dataset) for dataset in datasets))

        succeeded = sum(1 for result in results if result.success)
        logger.info(f"Composed {succeeded}/{len(results)} dashboard(s)")
        return list(results)

    async def _safe_tick(self) -> None:
        try:
            await self.tick()
        except Exception:
            logger.exception("Polling cycle failed")

    async def run_forever(self) -> None:
        """Start a polling cycle every interval, skipping while one is in flight"""
        logger.info(f"[AI] Listening for new Cumul.io datasets every {self.interval}s")
        current: Optional[asyncio.Task] = None

        while True:
            if current is None or current.done():
                current = asyncio.create_task(self._safe_tick())
            else:
                logger.warning("Previous poll is still running, skipping this tick")
            await asyncio.sleep(self.interval)
