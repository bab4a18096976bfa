"""
Shared fixtures for the invoice intake tests.
"""

import logging

import pytest

from config import ConfigurationManager
from invoice_intake.utils.logger import ROOT_LOGGER_NAME


SAMPLE_INVOICE_TEXT = """Acme Supply Co
123 Main St
Springfield, IL 62701
INVOICE
Invoice #INV-1003
Invoice Date: 03/14/2024
Due Date: 04/13/2024
Widget Assembly qty: 3 $45.00
2 x Consulting Hours $150.00
Subtotal $435.00
Amount Due: $435.00
"""


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the bundled settings.yaml"""
    ConfigurationManager.reset()
    yield ConfigurationManager()
    ConfigurationManager.reset()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handlers installed by the command-line entry point"""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_text():
    return SAMPLE_INVOICE_TEXT


@pytest.fixture
def sample_txt_file(tmp_path):
    """A plain-text invoice dump on disk"""
    path = tmp_path / "acme.txt"
    path.write_text(SAMPLE_INVOICE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "store" / "invoices.db")
