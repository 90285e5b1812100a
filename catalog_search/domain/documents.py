"""
Document mapping: raw dataset record + enrichment data -> search document.

Mappers are pure: the same record and enrichment always give an equal
document, so a rebuild of an unchanged dataset re-derives identical documents
under identical ids.
"""
import logging
from typing import Any, Mapping

from catalog_search.core.exceptions import MissingEnrichmentError
from catalog_search.domain.kinds import EntityKind
from catalog_search.domain.urls import entity_url
from catalog_search.domain.zodiac import zodiac_sign

logger = logging.getLogger(__name__)

DEFAULT_COLLAB = "Standard"

# Per-game item attribute -> document field. The last game defining it wins.
ITEM_GAME_FACETS: tuple[tuple[str, str], ...] = (
    ("orderable", "orderable"),
    ("interiorThemes", "interiorTheme"),
    ("fashionThemes", "fashionTheme"),
    ("set", "set"),
)


def document_id(kind: EntityKind, entity_id: str) -> str:
    """Index document id: ``<type>-<id>``, unique across kinds."""
    return f"{kind.value}-{entity_id}"


def _base_document(
    kind: EntityKind,
    record: Mapping[str, Any],
    enrichment: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Fields shared by every kind. Refuses to build a document without enrichment."""
    entity_id = record["id"]
    if enrichment is None:
        raise MissingEnrichmentError(kind.value, entity_id)

    name = record["name"]
    doc: dict[str, Any] = {
        "type": kind.value,
        "suggest": {"input": [name]},
        "keyword": entity_id,
        "name": name,
        "ngram": name,
        "url": entity_url(kind, entity_id),
        "game": list(_games(record)),
        "image": enrichment.get("image"),
    }
    if enrichment.get("variations") is not None:
        doc["variations"] = enrichment["variations"]
    if enrichment.get("variationImages") is not None:
        doc["variationImages"] = enrichment["variationImages"]
    return doc


def _games(record: Mapping[str, Any]) -> Mapping[str, Mapping[str, Any]]:
    return record.get("games") or {}


def map_villager(record: Mapping[str, Any], enrichment: Mapping[str, Any] | None) -> dict[str, Any]:
    """Build the search document for one villager record."""
    doc = _base_document(EntityKind.VILLAGER, record, enrichment)
    doc["gender"] = record.get("gender")
    doc["species"] = record.get("species")

    personalities: list[str] = []
    for game in _games(record).values():
        personality = game.get("personality")
        if personality and personality not in personalities:
            personalities.append(personality)
    doc["personality"] = personalities

    birthday = record.get("birthday")
    if birthday:
        try:
            doc["zodiac"] = zodiac_sign(birthday).lower()
        except ValueError:
            logger.warning("Villager %s has unparseable birthday %r, no zodiac indexed", record["id"], birthday)

    doc["collab"] = record.get("collab") or DEFAULT_COLLAB
    return doc


def map_item(record: Mapping[str, Any], enrichment: Mapping[str, Any] | None) -> dict[str, Any]:
    """Build the search document for one item record."""
    doc = _base_document(EntityKind.ITEM, record, enrichment)
    doc["category"] = record.get("category")

    for game in _games(record).values():
        for source, field in ITEM_GAME_FACETS:
            if game.get(source) is not None:
                doc[field] = game[source]
    return doc


MAPPERS = {
    EntityKind.VILLAGER: map_villager,
    EntityKind.ITEM: map_item,
}
