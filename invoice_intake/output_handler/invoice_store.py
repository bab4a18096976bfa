"""
Invoice Store Module.

Local persistent list of parsed invoices, kept in a SQLite file. Newest
records come first. Each record is stored as JSON together with its source
file name and the time it was stored.
"""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import get_config
from invoice_intake.extraction.parsed_invoice import ParsedInvoice
from invoice_intake.utils.logger import get_logger
from invoice_intake.utils.helpers import ensure_directory
from invoice_intake.utils.exceptions import ConfigurationError, StorageError

logger = get_logger(__name__)


class InvoiceStore:
    """
    SQLite-backed list of parsed invoices.

    Attributes:
        db_path: Path to the SQLite database file
        table_name: Name of the invoices table

    Example:
        >>> store = InvoiceStore("outputs/invoices.db")
        >>> store.add(parsed, source_file="acme.pdf")
        1
        >>> store.all()[0]['invoice']['invoice_number']
        'INV-1003'
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        """
        Initialize the store.

        Args:
            db_path: Path to database file. If None, uses configuration.

        Raises:
            ConfigurationError: If the configured table name is not an identifier.
        """
        if db_path:
            self.db_path = Path(db_path)
        else:
            output_dir = Path(get_config("paths.output_dir", "outputs"))
            self.db_path = output_dir / get_config("output.store.name", "invoices.db")

        self.table_name = get_config("output.store.table_name", "invoices")
        if not str(self.table_name).isidentifier():
            raise ConfigurationError("output.store.table_name", f"not a table name: {self.table_name!r}")

        ensure_directory(self.db_path.parent)
        self._create_tables()

        logger.debug(f"InvoiceStore initialized (db: {self.db_path})")

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _create_tables(self) -> None:
        create_sql = f"""
        CREATE TABLE IF NOT EXISTS {self.table_name} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            source_file TEXT,
            payload TEXT NOT NULL,
            stored_at TEXT NOT NULL
        )
        """

        try:
            conn = self._connect()
            try:
                conn.execute(create_sql)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError("create tables", str(e))

    def add(self, invoice: ParsedInvoice, source_file: Optional[str] = None) -> int:
        """
        Store a parsed invoice at the front of the list.

        Returns:
            Row id of the stored record.

        Raises:
            StorageError: If the write fails.
        """
        insert_sql = f"""
        INSERT INTO {self.table_name} (source_file, payload, stored_at)
        VALUES (?, ?, ?)
        """
        values = (
            source_file or '',
            json.dumps(invoice.to_dict(), ensure_ascii=False),
            datetime.now().isoformat()
        )

        try:
            conn = self._connect()
            try:
                cursor = conn.execute(insert_sql, values)
                conn.commit()
                record_id = cursor.lastrowid
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError("add", str(e))

        logger.info(f"Stored invoice {invoice.invoice_number or '(no number)'} as #{record_id}")
        return record_id

    def all(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        All stored records, newest first.

        Rows whose payload is not valid JSON are skipped.

        Returns:
            List of dicts with 'id', 'source_file', 'stored_at' and
            'invoice' (the ParsedInvoice dictionary).
        """
        query = f"SELECT id, source_file, payload, stored_at FROM {self.table_name} ORDER BY id DESC"
        params: tuple = ()
        if limit:
            query += " LIMIT ?"
            params = (int(limit),)

        try:
            conn = self._connect()
            try:
                rows = conn.execute(query, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError("all", str(e))

        records = []
        for record_id, source_file, payload, stored_at in rows:
            try:
                invoice = json.loads(payload)
            except (TypeError, ValueError):
                logger.warning(f"Skipping unreadable stored invoice #{record_id}")
                continue
            records.append({
                'id': record_id,
                'source_file': source_file,
                'stored_at': stored_at,
                'invoice': invoice
            })
        return records

    def invoices(self) -> List[ParsedInvoice]:
        """Stored records rebuilt as ParsedInvoice objects, newest first."""
        return [ParsedInvoice.from_dict(r['invoice']) for r in self.all()]

    def count(self) -> int:
        try:
            conn = self._connect()
            try:
                return conn.execute(f"SELECT COUNT(*) FROM {self.table_name}").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError("count", str(e))

    def clear(self) -> int:
        """
        Remove every stored record.

        Returns:
            Number of records removed.
        """
        try:
            conn = self._connect()
            try:
                removed = conn.execute(f"DELETE FROM {self.table_name}").rowcount
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError("clear", str(e))

        logger.info(f"Cleared {removed} stored invoice(s)")
        return removed
