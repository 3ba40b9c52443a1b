"""Record and vector store contracts consumed by the engine."""

from abc import ABC, abstractmethod
from typing import Sequence

from media_catalog.config.engine.models import DistanceMetric
from media_catalog.models.media import MediaRecord
from media_catalog.services.errors import ProviderError


class RepositoryError(ProviderError):
    """Raised when a store operation fails. Carries a non-leaking message; the driver error is `cause`."""


class RecordStore(ABC):
    """CRUD and bulk fetch for media records."""

    @abstractmethod
    async def create(self, record: MediaRecord) -> MediaRecord: ...

    @abstractmethod
    async def get(self, record_id: str) -> MediaRecord | None: ...

    @abstractmethod
    async def get_many(self, record_ids: Sequence[str]) -> list[MediaRecord]:
        """Records for the ids that exist, in the order of `record_ids`."""
        ...

    @abstractmethod
    async def list_all(self, limit: int | None = None) -> list[MediaRecord]:
        """Records newest first."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> bool: ...

    @abstractmethod
    async def set_embedding(self, record_id: str, embedding: list[float]) -> None: ...

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def count_embedded(self) -> int: ...

    @abstractmethod
    async def list_without_embedding(self) -> list[MediaRecord]: ...


class VectorCandidateStore(ABC):
    """Nearest-neighbour lookup over record embeddings."""

    @abstractmethod
    async def query(
        self,
        vector: list[float],
        limit: int,
        exclude_ids: Sequence[str] = (),
        metric: DistanceMetric = "cosine",
    ) -> list[tuple[str, float]]:
        """
        Up to `limit` (record_id, distance) pairs ordered by ascending distance under `metric`.
        Records without an embedding are never returned; an empty store returns [].
        """
        ...

    @abstractmethod
    async def upsert(self, record_id: str, vector: list[float], media_type: str) -> None: ...

    @abstractmethod
    async def delete(self, record_id: str) -> None: ...
