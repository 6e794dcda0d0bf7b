"""Share links for individual expenses and earnings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from core.models import TRANSACTION_KINDS, TransactionKind

__all__ = ["SHARE_PAGE", "ShareTarget", "build_share_link", "parse_share_params"]

SHARE_PAGE = "share"


@dataclass(frozen=True)
class ShareTarget:
    kind: TransactionKind
    id: int


def build_share_link(base_url: str, kind: TransactionKind, transaction_id: int) -> str:
    """Return a read-only link to a single transaction, e.g. ``…/?page=share&type=expense&id=3``."""

    if kind not in TRANSACTION_KINDS:
        raise ValueError(f"Unknown transaction kind: {kind!r}")
    query = urlencode({"page": SHARE_PAGE, "type": kind, "id": int(transaction_id)})
    return f"{base_url.rstrip('/')}/?{query}"


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def parse_share_params(params: Mapping[str, Any]) -> Optional[ShareTarget]:
    """Return the shared item named by query ``params``, or ``None`` if they do not name one."""

    if _first(params.get("page")) != SHARE_PAGE:
        return None

    kind = _first(params.get("type"))
    if kind not in TRANSACTION_KINDS:
        return None

    try:
        transaction_id = int(str(_first(params.get("id"))))
    except (TypeError, ValueError):
        return None
    if transaction_id <= 0:
        return None
    return ShareTarget(kind=kind, id=transaction_id)
