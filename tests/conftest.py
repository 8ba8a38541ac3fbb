"""Shared pytest fixtures."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from kryptotax.models.transaktion import Transaction, TransaktionsTyp

SAMPLE_XML = Path(__file__).parent / "test_data" / "sample_transactions.xml"


@pytest.fixture
def sample_xml():
    return SAMPLE_XML


@pytest.fixture
def btc_szenario():
    """Zwei BTC-Käufe 2023, Teilverkauf über beide Lots 2024."""
    return [
        Transaction(
            id="k1",
            datum=date(2023, 1, 1),
            kryptowaehrung="BTC",
            menge=Decimal("1"),
            wert_eur=Decimal("10000"),
            typ=TransaktionsTyp.KAUF,
        ),
        Transaction(
            id="k2",
            datum=date(2023, 6, 1),
            kryptowaehrung="BTC",
            menge=Decimal("1"),
            wert_eur=Decimal("20000"),
            typ=TransaktionsTyp.KAUF,
        ),
        Transaction(
            id="v1",
            datum=date(2024, 2, 1),
            kryptowaehrung="BTC",
            menge=Decimal("1.5"),
            wert_eur=Decimal("45000"),
            typ=TransaktionsTyp.VERKAUF,
        ),
    ]
