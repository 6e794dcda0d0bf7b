"""CSV loading utilities for Ledgerline's project ledgers."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Final, Iterable

import pandas as pd

from core.errors import TransactionValidationError
from core.models import Project, Transaction

__all__ = [
    "PROJECT_COLUMNS",
    "TRANSACTION_COLUMNS",
    "read_frame",
    "load_transactions",
    "frame_to_projects",
    "frame_to_transactions",
    "projects_to_frame",
    "transactions_to_frame",
]


PROJECT_COLUMNS: Final[list[str]] = ["id", "name"]
TRANSACTION_COLUMNS: Final[list[str]] = [
    "id",
    "project_id",
    "name",
    "amount",
    "date",
    "is_recurring",
    "recurring_period",
]

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "1", "yes", "y"})


def read_frame(path: str | Path, columns: list[str]) -> pd.DataFrame:
    """Return the CSV at ``path`` as a string frame, or an empty frame if it is missing.

    Every column is read as text so amounts keep their exact decimal digits.
    """

    path = Path(path)
    if not path.exists():
        return pd.DataFrame(columns=columns)

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df[columns]


def load_transactions(csv_path: str | Path) -> list[Transaction]:
    """Parse an expense or earning ledger CSV into transactions."""

    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")
    return frame_to_transactions(read_frame(path, TRANSACTION_COLUMNS))


def _parse_amount(raw: object, row_id: object) -> Decimal:
    try:
        return Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise TransactionValidationError([f"amount: invalid value {raw!r} in row {row_id}"]) from exc


def frame_to_transactions(df: pd.DataFrame) -> list[Transaction]:
    transactions: list[Transaction] = []
    for record in df.to_dict(orient="records"):
        period = str(record.get("recurring_period") or "").strip() or None
        transactions.append(
            Transaction(
                id=int(record["id"]),
                project_id=str(record["project_id"]),
                name=str(record["name"]),
                amount=_parse_amount(record["amount"], record["id"]),
                date=pd.Timestamp(record["date"]).date(),
                is_recurring=str(record["is_recurring"]).strip().lower() in _TRUE_VALUES,
                recurring_period=period,
            )
        )
    return transactions


def frame_to_projects(df: pd.DataFrame) -> list[Project]:
    return [Project(id=str(record["id"]), name=str(record["name"])) for record in df.to_dict(orient="records")]


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    records = [
        {
            "id": str(item.id),
            "project_id": item.project_id,
            "name": item.name,
            "amount": str(item.amount),
            "date": item.date.isoformat(),
            "is_recurring": "true" if item.is_recurring else "false",
            "recurring_period": item.recurring_period.value if item.recurring_period else "",
        }
        for item in transactions
    ]
    return pd.DataFrame(records, columns=TRANSACTION_COLUMNS)


def projects_to_frame(projects: Iterable[Project]) -> pd.DataFrame:
    records = [{"id": project.id, "name": project.name} for project in projects]
    return pd.DataFrame(records, columns=PROJECT_COLUMNS)
