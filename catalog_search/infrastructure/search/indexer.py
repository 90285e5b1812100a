"""
Bulk indexer: writes every record of one kind into a physical index.

One record at a time, one write per document, no batching and no retry. The
first failure aborts the kind and propagates; a partially written index is
never made live, so partial writes are harmless.
"""
import logging

from elasticsearch import ApiError, AsyncElasticsearch, TransportError
from redis.exceptions import RedisError

from catalog_search.core.exceptions import MissingEnrichmentError, WriteError
from catalog_search.domain.documents import MAPPERS, document_id
from catalog_search.domain.kinds import EntityKind
from catalog_search.infrastructure.dataset.loader import DatasetRecordSource
from catalog_search.infrastructure.store.redis_store import EnrichmentLookup

logger = logging.getLogger(__name__)

# Progress line every N documents
PROGRESS_EVERY = 100


class BulkIndexer:
    def __init__(
        self,
        client: AsyncElasticsearch,
        source: DatasetRecordSource,
        enrichment: EnrichmentLookup,
    ) -> None:
        self._client = client
        self._source = source
        self._enrichment = enrichment

    async def index_all(self, index_name: str, kind: EntityKind) -> int:
        """Index every record of ``kind``; returns the number of documents written."""
        mapper = MAPPERS[kind]
        count = 0
        for record in self._source.records(kind):
            entity_id = record["id"]
            try:
                enrichment = await self._enrichment.get(entity_id)
            except (RedisError, ValueError) as e:
                raise MissingEnrichmentError(kind.value, entity_id, e) from e

            doc = mapper(record, enrichment)
            doc_id = document_id(kind, entity_id)
            try:
                await self._client.index(index=index_name, id=doc_id, document=doc)
            except (ApiError, TransportError) as e:
                raise WriteError(kind.value, entity_id, e) from e

            count += 1
            logger.debug("Indexed %s into %s", doc_id, index_name)
            if count % PROGRESS_EVERY == 0:
                logger.info("Indexed %d %s documents so far", count, kind.value)

        logger.info("Indexed %d %s documents into %s", count, kind.value, index_name)
        return count
