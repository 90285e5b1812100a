from enum import Enum


class EntityKind(str, Enum):
    """Entity kinds in the catalog. The value doubles as the document ``type``."""

    VILLAGER = "villager"
    ITEM = "item"

    @property
    def directory(self) -> str:
        """Dataset sub-directory holding one JSON file per entity of this kind."""
        return f"{self.value}s"


# Population order of a rebuild.
REBUILD_ORDER: tuple[EntityKind, ...] = (EntityKind.VILLAGER, EntityKind.ITEM)
