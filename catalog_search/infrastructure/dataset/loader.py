"""
Dataset loader: one JSON file per entity, one directory per kind.

    <DATA_DIR>/villagers/ace.json
    <DATA_DIR>/items/acoustic-guitar.json
"""
import json
import logging
from pathlib import Path
from typing import Any, Iterator

from catalog_search.core.exceptions import RecordSourceError
from catalog_search.domain.kinds import EntityKind

logger = logging.getLogger(__name__)


class DatasetRecordSource:
    """Read-only iterable source of raw entity records."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def kind_dir(self, kind: EntityKind) -> Path:
        return self.data_dir / kind.directory

    def records(self, kind: EntityKind) -> Iterator[dict[str, Any]]:
        """Yield raw records of ``kind`` in file-name order, one file at a time."""
        directory = self.kind_dir(kind)
        if not directory.is_dir():
            raise RecordSourceError(str(directory), FileNotFoundError(f"{directory} is not a directory"))

        for path in sorted(directory.glob("*.json")):
            yield self._load(path)

    def _load(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as fh:
                record = json.load(fh)
        except (OSError, ValueError) as e:
            raise RecordSourceError(str(path), e) from e
        if not isinstance(record, dict) or not record.get("id") or not record.get("name"):
            raise RecordSourceError(str(path), ValueError("record must be an object with 'id' and 'name'"))
        return record
