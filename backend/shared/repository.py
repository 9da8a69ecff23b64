"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating PostgREST failures into the
application's BackendError at the boundary.
"""

import logging
from typing import Any, TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import BackendError, classify_backend_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Error translation via self._execute
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def get_by_id(self, user_id: str) -> Optional[Profile]:
                result = self._execute(
                    "profiles.get",
                    self._db.table("profiles").select("*").eq("id", user_id).limit(1),
                )
                if not result.data:
                    return None
                return Profile(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, operation: str, query: Any) -> Any:
        """
        Run a PostgREST query builder and return its response.

        Raises:
            BackendError: classified failure, never the raw client exception.
        """
        try:
            return query.execute()
        except APIError as e:
            raise self._translate(e, operation) from e
        except BackendError:
            raise
        except Exception as e:
            # Transport failures (timeouts, connection resets) land here
            raise self._translate(e, operation) from e

    @staticmethod
    def _translate(exc: Exception, operation: str) -> BackendError:
        error = classify_backend_error(exc, operation)
        logger.warning(
            "Backend call failed: %s (kind=%s, code=%s)",
            operation,
            error.kind.value,
            error.backend_code,
        )
        return error
