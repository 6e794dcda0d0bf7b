"""CSV-backed persistence for projects, expenses and earnings."""

from __future__ import annotations

import dataclasses
import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import pandas as pd

from core.data_loader import (
    PROJECT_COLUMNS,
    TRANSACTION_COLUMNS,
    frame_to_projects,
    frame_to_transactions,
    projects_to_frame,
    read_frame,
    transactions_to_frame,
)
from core.errors import DuplicateRecord, RecordNotFound
from core.models import TRANSACTION_KINDS, Project, Transaction, TransactionKind
from core.validation import validate_project_name

__all__ = ["LedgerStore"]

logger = logging.getLogger(__name__)

PROJECTS_FILE = "projects.csv"
TRANSACTION_FILES: dict[TransactionKind, str] = {
    "expense": "expenses.csv",
    "earning": "earnings.csv",
}


class LedgerStore:
    """Create, read, update and delete ledger records stored as CSV files.

    Every call re-reads the files it touches, so callers always see the full
    current set of a project's transactions.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    # -- files -----------------------------------------------------------------

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _transaction_file(self, kind: str) -> str:
        if kind not in TRANSACTION_KINDS:
            raise ValueError(f"Unknown transaction kind: {kind!r}")
        return TRANSACTION_FILES[kind]  # type: ignore[index]

    def _write(self, df: pd.DataFrame, filename: str) -> None:
        """Write ``df`` atomically via a ``.tmp`` file and ``os.replace``."""

        self.data_dir.mkdir(parents=True, exist_ok=True)
        target = self._path(filename)
        tmp = target.with_suffix(".tmp")
        try:
            df.to_csv(tmp, index=False)
            os.replace(tmp, target)
        finally:
            tmp.unlink(missing_ok=True)

    def _read_transactions(self, kind: str) -> list[Transaction]:
        path = self._path(self._transaction_file(kind))
        return frame_to_transactions(read_frame(path, TRANSACTION_COLUMNS))

    def _write_transactions(self, kind: str, transactions: list[Transaction]) -> None:
        self._write(transactions_to_frame(transactions), self._transaction_file(kind))

    def is_empty(self) -> bool:
        return not self.list_projects()

    # -- projects --------------------------------------------------------------

    def list_projects(self) -> list[Project]:
        return frame_to_projects(read_frame(self._path(PROJECTS_FILE), PROJECT_COLUMNS))

    def get_project(self, project_id: str) -> Project:
        for project in self.list_projects():
            if project.id == project_id:
                return project
        raise RecordNotFound("project", project_id)

    def add_project(self, name: str, project_id: Optional[str] = None) -> Project:
        project = Project(id=project_id or uuid.uuid4().hex, name=validate_project_name(name))
        projects = self.list_projects()
        if any(existing.id == project.id for existing in projects):
            raise DuplicateRecord("project", project.id)
        projects.append(project)
        self._write(projects_to_frame(projects), PROJECTS_FILE)
        logger.info("Added project %s (%s)", project.name, project.id)
        return project

    # -- transactions ----------------------------------------------------------

    def list_transactions(self, kind: TransactionKind, project_id: Optional[str] = None) -> list[Transaction]:
        transactions = self._read_transactions(kind)
        if project_id is None:
            return transactions
        return [item for item in transactions if item.project_id == project_id]

    def get_transaction(self, kind: TransactionKind, transaction_id: int) -> Transaction:
        for item in self._read_transactions(kind):
            if item.id == transaction_id:
                return item
        raise RecordNotFound(kind, transaction_id)

    def add_transaction(self, kind: TransactionKind, transaction: Transaction) -> Transaction:
        """Store ``transaction`` under a freshly assigned id and return the stored copy."""

        self.get_project(transaction.project_id)
        transactions = self._read_transactions(kind)
        next_id = max((item.id for item in transactions), default=0) + 1
        stored = dataclasses.replace(transaction, id=next_id)
        transactions.append(stored)
        self._write_transactions(kind, transactions)
        logger.info("Added %s %s to project %s", kind, stored.id, stored.project_id)
        return stored

    def update_transaction(self, kind: TransactionKind, transaction: Transaction) -> Transaction:
        """Replace the stored record with the same id. The project never changes."""

        transactions = self._read_transactions(kind)
        for index, existing in enumerate(transactions):
            if existing.id != transaction.id:
                continue
            if transaction.project_id != existing.project_id:
                logger.warning(
                    "Ignoring project change for %s %s (%s -> %s)",
                    kind,
                    existing.id,
                    existing.project_id,
                    transaction.project_id,
                )
            updated = dataclasses.replace(transaction, project_id=existing.project_id)
            transactions[index] = updated
            self._write_transactions(kind, transactions)
            logger.info("Updated %s %s", kind, updated.id)
            return updated
        raise RecordNotFound(kind, transaction.id)

    def delete_transaction(self, kind: TransactionKind, transaction_id: int) -> None:
        transactions = self._read_transactions(kind)
        remaining = [item for item in transactions if item.id != transaction_id]
        if len(remaining) == len(transactions):
            raise RecordNotFound(kind, transaction_id)
        self._write_transactions(kind, remaining)
        logger.info("Deleted %s %s", kind, transaction_id)

    # -- named helpers ---------------------------------------------------------

    def list_expenses(self, project_id: str) -> list[Transaction]:
        return self.list_transactions("expense", project_id)

    def get_expense(self, expense_id: int) -> Transaction:
        return self.get_transaction("expense", expense_id)

    def add_expense(self, expense: Transaction) -> Transaction:
        return self.add_transaction("expense", expense)

    def update_expense(self, expense: Transaction) -> Transaction:
        return self.update_transaction("expense", expense)

    def delete_expense(self, expense_id: int) -> None:
        self.delete_transaction("expense", expense_id)

    def list_earnings(self, project_id: str) -> list[Transaction]:
        return self.list_transactions("earning", project_id)

    def get_earning(self, earning_id: int) -> Transaction:
        return self.get_transaction("earning", earning_id)

    def add_earning(self, earning: Transaction) -> Transaction:
        return self.add_transaction("earning", earning)

    def update_earning(self, earning: Transaction) -> Transaction:
        return self.update_transaction("earning", earning)

    def delete_earning(self, earning_id: int) -> None:
        self.delete_transaction("earning", earning_id)
