"""
Blog Backend: Abstract Data Store Interface
=============================================

What:  Abstract base class for clients of the hosted table store.
Why:   Handlers receive a DataStore through dependency injection, so the
       hosted REST store, a direct SQL connection, or a test double can be
       swapped in without touching routes or BlogService.
How:   Concrete implementations inherit from DataStore and implement
       select(), insert(), health_check() and close().

Implementations:
    - RestDataStore: PostgREST-style `/rest/v1` interface over httpx (default)
    - SqlDataStore:  the same tables through async SQLAlchemy
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence


class DataStore(ABC):
    """
    Contract:
        - Rows travel as plain dicts keyed by column name
        - The store generates `id` and `created_at`; callers never send them
        - Every select/insert failure is raised as DataStoreError with the
          store's own message; nothing is retried
        - One instance is shared by all concurrent requests
    """

    #: Short name reported by the health endpoint
    backend_name: str = "unknown"

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch every row of `table` matching all equality `filters`.

        Args:
            table:   Table name (`posts` or `comments`)
            filters: Column → value; each becomes `column = value`

        Returns:
            Matching rows in store order. Empty list when nothing matches.

        Raises:
            DataStoreError: The store rejected the query or was unreachable.
        """
        ...

    @abstractmethod
    async def insert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> List[Dict[str, Any]]:
        """
        Insert `rows` into `table` and return them as stored.

        Returns:
            The inserted rows including store-generated columns.

        Raises:
            DataStoreError: Constraint violation, bad column, or transport failure.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight reachability probe. Returns False instead of raising."""
        ...

    async def close(self) -> None:
        """Release connections. Called once on application shutdown."""
        return None
