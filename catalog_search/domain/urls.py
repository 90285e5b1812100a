from urllib.parse import quote

from catalog_search.domain.kinds import EntityKind


def entity_url(kind: EntityKind, entity_id: str) -> str:
    """Site-relative URL of an entity page, e.g. ``/villager/ace``."""
    return f"/{kind.value}/{quote(entity_id, safe='')}"
