"""
Shared fixtures: a small on-disk dataset and in-memory stand-ins for the
Elasticsearch and Redis clients, so a whole rebuild runs without services.
"""
import json
from pathlib import Path

import pytest
from elasticsearch import ConnectionError as ESConnectionError
from redis.exceptions import ConnectionError as RedisConnectionError

from catalog_search.core.config import Settings
from catalog_search.domain.kinds import EntityKind
from catalog_search.infrastructure.dataset.loader import DatasetRecordSource
from catalog_search.infrastructure.search.indexer import BulkIndexer
from catalog_search.infrastructure.search.provisioner import IndexProvisioner
from catalog_search.infrastructure.store.redis_store import EnrichmentLookup, PointerStore
from catalog_search.services.rebuild import RebuildOrchestrator

POINTER_KEY = "searchIndex"

VILLAGERS = [
    {
        "id": "ace",
        "name": "Ace",
        "gender": "male",
        "species": "bird",
        "birthday": "8-11",
        "games": {"nh": {"personality": "jock"}},
    },
    {
        "id": "marina",
        "name": "Marina",
        "gender": "female",
        "species": "octopus",
        "birthday": "06-26",
        "collab": "Welcome Amiibo",
        "games": {
            "nl": {"personality": "normal"},
            "nh": {"personality": "normal"},
        },
    },
]

ITEMS = [
    {
        "id": "acoustic-guitar",
        "name": "Acoustic Guitar",
        "category": "furniture",
        "games": {
            "nl": {"orderable": False, "set": "Music"},
            "nh": {"orderable": True, "interiorThemes": ["Concert"]},
        },
    },
]

ENRICHMENT = {
    "ace": {"image": {"thumb": "ace.png"}},
    "marina": {"image": {"thumb": "marina.png"}},
    "acoustic-guitar": {
        "image": {"thumb": "guitar.png"},
        "variations": ["natural", "black"],
        "variationImages": {"natural": "guitar-natural.png", "black": "guitar-black.png"},
    },
}


def write_dataset(root: Path, villagers=VILLAGERS, items=ITEMS) -> Path:
    for kind, records in ((EntityKind.VILLAGER, villagers), (EntityKind.ITEM, items)):
        directory = root / kind.directory
        directory.mkdir(parents=True, exist_ok=True)
        for record in records:
            (directory / f"{record['id']}.json").write_text(json.dumps(record), encoding="utf-8")
    return root


class FakeIndices:
    def __init__(self, engine: "FakeElasticsearch") -> None:
        self._engine = engine
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise ESConnectionError(f"{op} refused")

    async def create(self, index: str, settings: dict) -> dict:
        self.calls.append(("create", index, settings))
        self._maybe_fail("create")
        self._engine.indices_data[index] = {"settings": settings, "mappings": None, "docs": {}}
        return {"acknowledged": True, "index": index}

    async def put_mapping(self, index: str, properties: dict) -> dict:
        self.calls.append(("put_mapping", index, properties))
        self._maybe_fail("put_mapping")
        self._engine.indices_data[index]["mappings"] = properties
        return {"acknowledged": True}

    async def delete(self, index: str) -> dict:
        self.calls.append(("delete", index))
        self._maybe_fail("delete")
        del self._engine.indices_data[index]
        return {"acknowledged": True}


class FakeElasticsearch:
    def __init__(self) -> None:
        self.indices_data: dict[str, dict] = {}
        self.indices = FakeIndices(self)
        self.fail_on_doc_ids: set[str] = set()
        self.closed = False

    async def index(self, index: str, id: str, document: dict) -> dict:
        if id in self.fail_on_doc_ids:
            raise ESConnectionError(f"write of {id} refused")
        self.indices_data[index]["docs"][id] = document
        return {"_id": id, "result": "created"}

    def docs(self, index: str) -> dict[str, dict]:
        return self.indices_data[index]["docs"]

    async def close(self) -> None:
        self.closed = True


class FakeRedis:
    def __init__(self, data: dict | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.fail_get = False
        self.fail_set = False
        self.get_calls: list[str] = []

    async def get(self, key: str):
        self.get_calls.append(key)
        if self.fail_get:
            raise RedisConnectionError("redis down")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        if self.fail_set:
            raise RedisConnectionError("redis down")
        self.data[key] = value
        return True

    async def aclose(self) -> None:
        pass


class Clock:
    """Deterministic millisecond clock for index names."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "data")


@pytest.fixture
def settings(dataset_dir: Path) -> Settings:
    return Settings(
        DATA_DIR=str(dataset_dir),
        ELASTICSEARCH_URL="http://localhost:9200",
        REDIS_URL="redis://localhost:6379/0",
    )


@pytest.fixture
def es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def redis() -> FakeRedis:
    return FakeRedis({entity_id: json.dumps(data) for entity_id, data in ENRICHMENT.items()})


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def make_orchestrator(es, redis, dataset_dir, clock):
    def _make() -> RebuildOrchestrator:
        return RebuildOrchestrator(
            provisioner=IndexProvisioner(es, "search", clock=clock),
            indexer=BulkIndexer(es, DatasetRecordSource(dataset_dir), EnrichmentLookup(redis)),
            pointer=PointerStore(redis, POINTER_KEY),
        )

    return _make
