"""
Rebuild orchestrator: build a new physical index, then swap the live pointer.

    IDLE -> PROVISIONING -> POPULATING -> SWAPPING -> RECLAIMING -> DONE
                 |               |              |
                 +---------------+--------------+--------------> ABORTED

The pointer write in SWAPPING is the only change readers can observe. Before
it they see the previous index (or none), after it the new, fully populated
one. Errors before the swap leave the pointer untouched; the half-built index
is kept for inspection. Deleting the superseded index is best effort.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

from elasticsearch import AsyncElasticsearch
from redis.asyncio import Redis

from catalog_search.core.config import Settings
from catalog_search.core.exceptions import ReclaimError, RecordSourceError
from catalog_search.domain.kinds import REBUILD_ORDER, EntityKind
from catalog_search.infrastructure.clients import get_elasticsearch_client, get_redis_client
from catalog_search.infrastructure.dataset.loader import DatasetRecordSource
from catalog_search.infrastructure.search.indexer import BulkIndexer
from catalog_search.infrastructure.search.provisioner import IndexProvisioner
from catalog_search.infrastructure.store.redis_store import EnrichmentLookup, PointerStore

logger = logging.getLogger(__name__)


class RebuildState(str, Enum):
    IDLE = "idle"
    PROVISIONING = "provisioning"
    POPULATING = "populating"
    SWAPPING = "swapping"
    RECLAIMING = "reclaiming"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RebuildResult:
    index_name: str
    previous_index: str | None = None
    counts: dict[str, int] = field(default_factory=dict)
    reclaim_error: ReclaimError | None = None

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class RebuildOrchestrator:
    """Runs one rebuild. Instances are single use."""

    def __init__(
        self,
        provisioner: IndexProvisioner,
        indexer: BulkIndexer,
        pointer: PointerStore,
        kinds: tuple[EntityKind, ...] = REBUILD_ORDER,
    ) -> None:
        self._provisioner = provisioner
        self._indexer = indexer
        self._pointer = pointer
        self._kinds = kinds
        self.state = RebuildState.IDLE

    def _enter(self, state: RebuildState) -> None:
        logger.info("Rebuild %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self) -> RebuildResult:
        if self.state is not RebuildState.IDLE:
            raise RuntimeError(f"Rebuild already ran (state: {self.state.value})")
        try:
            return await self._run()
        except Exception:
            self._enter(RebuildState.ABORTED)
            raise

    async def _run(self) -> RebuildResult:
        self._enter(RebuildState.PROVISIONING)
        index_name = await self._provisioner.provision()
        result = RebuildResult(index_name=index_name)

        self._enter(RebuildState.POPULATING)
        for kind in self._kinds:
            result.counts[kind.value] = await self._indexer.index_all(index_name, kind)

        self._enter(RebuildState.SWAPPING)
        result.previous_index = await self._pointer.get()
        await self._pointer.set(index_name)
        logger.info("Search index swapped: %s -> %s", result.previous_index or "(none)", index_name)

        if result.previous_index and result.previous_index != index_name:
            self._enter(RebuildState.RECLAIMING)
            try:
                await self._provisioner.delete(result.previous_index)
            except ReclaimError as e:
                logger.warning("%s; leaving it orphaned", e)
                result.reclaim_error = e

        self._enter(RebuildState.DONE)
        return result


def build_orchestrator(
    settings: Settings,
    es: AsyncElasticsearch,
    redis: Redis,
    data_dir: str | None = None,
) -> RebuildOrchestrator:
    """Wire the rebuild components around already constructed clients."""
    data_dir = data_dir or settings.DATA_DIR
    if not data_dir:
        raise RecordSourceError("(no dataset directory)", ValueError("set DATA_DIR or pass --data-dir"))
    source = DatasetRecordSource(data_dir)
    enrichment = EnrichmentLookup(redis, settings.ENRICHMENT_KEY_PREFIX)
    return RebuildOrchestrator(
        provisioner=IndexProvisioner(es, settings.SEARCH_INDEX_PREFIX),
        indexer=BulkIndexer(es, source, enrichment),
        pointer=PointerStore(redis, settings.SEARCH_INDEX_POINTER_KEY),
    )


async def run_rebuild(settings: Settings, data_dir: str | None = None) -> RebuildResult:
    """Full rebuild with clients owned for the duration of the run."""
    es = get_elasticsearch_client(settings)
    redis = get_redis_client(settings)
    try:
        orchestrator = build_orchestrator(settings, es, redis, data_dir=data_dir)
        result = await orchestrator.run()
        logger.info(
            "Rebuild complete: index=%s %s total=%d",
            result.index_name,
            " ".join(f"{kind}={count}" for kind, count in result.counts.items()),
            result.total,
        )
        return result
    finally:
        await es.close()
        await redis.aclose()


async def read_current_index(settings: Settings) -> str | None:
    redis = get_redis_client(settings)
    try:
        return await PointerStore(redis, settings.SEARCH_INDEX_POINTER_KEY).get()
    finally:
        await redis.aclose()
