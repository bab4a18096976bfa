"""
Tests for SQLite persistence of parsed invoices.
"""

import sqlite3

import pytest

from invoice_intake.extraction import LineItem, ParsedInvoice
from invoice_intake.output_handler import InvoiceStore
from invoice_intake.utils.exceptions import ConfigurationError


@pytest.fixture
def store(store_path):
    """A fresh store in a temporary directory"""
    return InvoiceStore(store_path)


def test_store_creates_its_directory(store, store_path):
    assert store.db_path.exists()
    assert str(store.db_path) == store_path


def test_add_persists_to_db(store, store_path):
    """Test that adding an invoice writes a JSON row"""
    record_id = store.add(ParsedInvoice(vendor="Acme Supply Co"), source_file="acme.pdf")

    conn = sqlite3.connect(store_path)
    row = conn.execute(
        "SELECT source_file, payload FROM invoices WHERE id = ?", (record_id,)
    ).fetchone()
    conn.close()

    assert row[0] == "acme.pdf"
    assert "Acme Supply Co" in row[1]


def test_newest_first(store):
    store.add(ParsedInvoice(invoice_number="1"))
    store.add(ParsedInvoice(invoice_number="2"))
    store.add(ParsedInvoice(invoice_number="3"))

    numbers = [r['invoice']['invoice_number'] for r in store.all()]

    assert numbers == ["3", "2", "1"]
    assert [r['invoice']['invoice_number'] for r in store.all(limit=2)] == ["3", "2"]


def test_records_survive_a_new_instance(store, store_path):
    invoice = ParsedInvoice(
        vendor="Acme Supply Co",
        amount_due="$5.00",
        line_items=(LineItem("Bolts", 10, "$0.50"),)
    )
    store.add(invoice)

    reopened = InvoiceStore(store_path)

    assert reopened.count() == 1
    assert reopened.invoices() == [invoice]


def test_unreadable_rows_are_skipped(store, store_path):
    store.add(ParsedInvoice(vendor="Good"))
    conn = sqlite3.connect(store_path)
    conn.execute(
        "INSERT INTO invoices (source_file, payload, stored_at) VALUES (?, ?, ?)",
        ("bad.pdf", "{not json", "2024-01-01T00:00:00")
    )
    conn.commit()
    conn.close()

    records = store.all()

    assert store.count() == 2
    assert [r['invoice']['vendor'] for r in records] == ["Good"]


def test_clear(store):
    store.add(ParsedInvoice(vendor="A"))
    store.add(ParsedInvoice(vendor="B"))

    assert store.clear() == 2
    assert store.count() == 0
    assert store.all() == []


def test_bad_table_name_is_a_configuration_error(default_config, store_path):
    default_config._config['output']['store']['table_name'] = "invoices; DROP TABLE x"

    with pytest.raises(ConfigurationError):
        InvoiceStore(store_path)
