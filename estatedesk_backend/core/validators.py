"""
Ordered validation pipeline.

Services declare their checks up front, in the order errors must be
reported, and run them once. The first failing check raises its error and
the rest are skipped.
"""

import inspect
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from .base_crud import BaseCRUD
from .exceptions import EstateDeskException, ValidationError

Check = Callable[[], bool | Awaitable[bool]]


class ValidationPipeline:
    """A fixed sequence of (predicate, error) pairs run with short-circuiting."""

    def __init__(self) -> None:
        self._checks: list[tuple[Check, EstateDeskException]] = []

    def require(self, check: Check, error: EstateDeskException) -> "ValidationPipeline":
        """Append a check; ``check`` may be sync or async and must return truthy to pass."""
        self._checks.append((check, error))
        return self

    def require_owned(
        self,
        db: AsyncSession,
        crud: BaseCRUD,
        account_id: int,
        record_id: int | None,
        message: str,
    ) -> "ValidationPipeline":
        """Require that an optional reference points at a row the account owns."""

        async def check() -> bool:
            if record_id is None:
                return True
            return await crud.exists(db, account_id, id=record_id)

        return self.require(check, ValidationError(message))

    async def run(self) -> None:
        for check, error in self._checks:
            outcome = check()
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if not outcome:
                raise error

    def __len__(self) -> int:
        return len(self._checks)
