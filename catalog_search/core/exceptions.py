"""
Rebuild errors.

Every fatal error aborts the whole rebuild and reaches the caller with the
stage it happened in and the underlying cause. ReclaimError is the only
non-fatal kind: it is recorded on the result, never raised out of a rebuild.
"""
from typing import Any


class RebuildError(Exception):
    """Base error for the index rebuild pipeline."""

    stage = "rebuild"

    def __init__(self, message: str, cause: BaseException | None = None, detail: Any = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.detail = detail

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {self.cause}"
        return message


class ConfigurationError(RebuildError):
    """The engine rejected index creation or the mapping definition."""

    stage = "provisioning"

    def __init__(self, index_name: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Could not configure index {index_name}", cause)
        self.index_name = index_name


class RecordSourceError(RebuildError):
    """A dataset file could not be read or parsed."""

    stage = "populating"

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Could not load record {path}", cause)
        self.path = path


class MissingEnrichmentError(RebuildError):
    """No enrichment entry exists for a record that is in the dataset."""

    stage = "populating"

    def __init__(self, kind: str, entity_id: str, cause: BaseException | None = None) -> None:
        super().__init__(f"No enrichment data for {kind} {entity_id}", cause)
        self.kind = kind
        self.entity_id = entity_id


class WriteError(RebuildError):
    """A single document write was rejected by the engine."""

    stage = "populating"

    def __init__(self, kind: str, entity_id: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Could not index {kind} {entity_id}", cause)
        self.kind = kind
        self.entity_id = entity_id


class PointerStoreError(RebuildError):
    """Reading or writing the live index pointer failed."""

    stage = "swapping"

    def __init__(self, message: str, cause: BaseException | None = None, index_name: str | None = None) -> None:
        super().__init__(message, cause)
        self.index_name = index_name


class ReclaimError(RebuildError):
    """The superseded index could not be deleted."""

    stage = "reclaiming"

    def __init__(self, index_name: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Could not delete index {index_name}", cause)
        self.index_name = index_name
