from __future__ import annotations

from typing import Any, Dict, Protocol

UserId = str

DEFAULT_TRANSACTIONS_LIMIT = 5


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


# ---- Ports (Hexagonal boundaries) ----
class BankPort(Protocol):
    """Read/create operations against the bank REST API.

    Every method returns the decoded JSON body untouched; normalization is the
    use cases' job. Failures surface as ``TransportError``.
    """

    async def list_users(self) -> Any: ...  # expected: [{"id", "name", "email"}]
    async def create_user(self, name: str, email: str) -> Any: ...  # {"id", ...}
    async def list_accounts(self, user_id: UserId) -> Any: ...
    async def list_cards(self, user_id: UserId) -> Any: ...
    async def list_transactions(
        self, user_id: UserId, limit: int = DEFAULT_TRANSACTIONS_LIMIT
    ) -> Any: ...

