"""Mapping of raw records + enrichment into search documents."""
import json

import pytest

from catalog_search.core.exceptions import MissingEnrichmentError
from catalog_search.domain.documents import DEFAULT_COLLAB, document_id, map_item, map_villager
from catalog_search.domain.kinds import EntityKind

IMAGE = {"image": {"thumb": "x.png"}}


def villager(**overrides):
    record = {
        "id": "marina",
        "name": "Marina",
        "gender": "female",
        "species": "octopus",
        "games": {"A": {"personality": "peppy"}},
    }
    record.update(overrides)
    return record


def item(**overrides):
    record = {"id": "chair", "name": "Chair", "category": "furniture", "games": {}}
    record.update(overrides)
    return record


class TestDocumentId:
    def test_type_dash_id(self):
        assert document_id(EntityKind.VILLAGER, "ace") == "villager-ace"
        assert document_id(EntityKind.ITEM, "ace") == "item-ace"


class TestMapVillager:
    def test_common_fields(self):
        doc = map_villager(villager(), IMAGE)

        assert doc["type"] == "villager"
        assert doc["keyword"] == "marina"
        assert doc["name"] == "Marina"
        assert doc["ngram"] == "Marina"
        assert doc["suggest"] == {"input": ["Marina"]}
        assert doc["url"] == "/villager/marina"
        assert doc["image"] == {"thumb": "x.png"}
        assert doc["gender"] == "female"
        assert doc["species"] == "octopus"
        assert "variations" not in doc

    def test_personality_deduplicated_game_kept_per_game(self):
        record = villager(
            games={
                "A": {"personality": "peppy"},
                "B": {"personality": "peppy"},
                "C": {"personality": "snooty"},
            }
        )
        doc = map_villager(record, IMAGE)

        assert doc["personality"] == ["peppy", "snooty"]
        assert doc["game"] == ["A", "B", "C"]

    def test_collab_defaults_to_standard(self):
        assert map_villager(villager(), IMAGE)["collab"] == DEFAULT_COLLAB == "Standard"

    def test_collab_literal_value(self):
        doc = map_villager(villager(collab="Welcome Amiibo"), IMAGE)
        assert doc["collab"] == "Welcome Amiibo"

    def test_zodiac_from_birthday(self):
        doc = map_villager(villager(birthday="01-01"), IMAGE)
        assert doc["zodiac"] == "capricorn"
        assert doc["zodiac"] == doc["zodiac"].lower()

    def test_no_birthday_no_zodiac(self):
        assert "zodiac" not in map_villager(villager(), IMAGE)

    def test_unparseable_birthday_no_zodiac(self):
        assert "zodiac" not in map_villager(villager(birthday="13-45"), IMAGE)

    def test_missing_enrichment(self):
        with pytest.raises(MissingEnrichmentError) as exc_info:
            map_villager(villager(), None)
        assert exc_info.value.kind == "villager"
        assert exc_info.value.entity_id == "marina"

    def test_deterministic(self):
        record = villager(birthday="8-11", games={"A": {"personality": "jock"}, "B": {"personality": "lazy"}})
        first = json.dumps(map_villager(record, IMAGE))
        second = json.dumps(map_villager(record, IMAGE))
        assert first == second

    def test_record_not_mutated(self):
        record = villager(birthday="8-11")
        snapshot = json.dumps(record, sort_keys=True)
        map_villager(record, IMAGE)
        assert json.dumps(record, sort_keys=True) == snapshot


class TestMapItem:
    def test_last_game_wins(self):
        record = item(games={"A": {"set": "Rustic"}, "B": {"set": "Modern"}})
        assert map_item(record, IMAGE)["set"] == "Modern"

    def test_facets_collapsed_per_attribute(self):
        record = item(
            games={
                "A": {"orderable": False, "interiorThemes": ["Rustic"], "fashionThemes": ["Daily"]},
                "B": {"orderable": True, "interiorThemes": ["Modern"]},
            }
        )
        doc = map_item(record, IMAGE)

        assert doc["orderable"] is True
        assert doc["interiorTheme"] == ["Modern"]
        # B never defines fashionThemes, so A's value stands.
        assert doc["fashionTheme"] == ["Daily"]
        assert doc["game"] == ["A", "B"]

    def test_category_and_type(self):
        doc = map_item(item(), IMAGE)
        assert doc["type"] == "item"
        assert doc["category"] == "furniture"
        assert doc["url"] == "/item/chair"
        assert doc["game"] == []
        assert "set" not in doc

    def test_variations_copied_from_enrichment(self):
        enrichment = {"image": "chair.png", "variations": ["red"], "variationImages": {"red": "red.png"}}
        doc = map_item(item(), enrichment)
        assert doc["image"] == "chair.png"
        assert doc["variations"] == ["red"]
        assert doc["variationImages"] == {"red": "red.png"}

    def test_missing_enrichment(self):
        with pytest.raises(MissingEnrichmentError) as exc_info:
            map_item(item(), None)
        assert exc_info.value.kind == "item"
        assert exc_info.value.entity_id == "chair"
