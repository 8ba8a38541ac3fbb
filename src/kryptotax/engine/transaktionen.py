"""Validierung, Sortierung und Replay der Transaktionshistorie."""

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal

from kryptotax.engine.errors import MalformedTransactionError
from kryptotax.engine.fifo import FifoBuch
from kryptotax.models.transaktion import Transaction, TransaktionsTyp

logger = logging.getLogger(__name__)

ZUGANGS_TYPEN = (TransaktionsTyp.KAUF, TransaktionsTyp.STAKING)


def pruefe_transaktion(tx: Transaction) -> None:
    """Wirft MalformedTransactionError bei ungültigen Daten."""
    if not isinstance(tx.typ, TransaktionsTyp):
        raise MalformedTransactionError(tx.id, f"unbekannter Typ {tx.typ!r}")
    if not isinstance(tx.datum, date):
        raise MalformedTransactionError(tx.id, f"Datum ist kein Kalendertag: {tx.datum!r}")
    if not isinstance(tx.kryptowaehrung, str) or not tx.kryptowaehrung.strip():
        raise MalformedTransactionError(tx.id, "kein Asset angegeben")
    for name, wert in (("Menge", tx.menge), ("Wert", tx.wert_eur)):
        if not isinstance(wert, (Decimal, int)) or isinstance(wert, bool):
            raise MalformedTransactionError(tx.id, f"{name} ist keine Zahl: {wert!r}")
        if isinstance(wert, Decimal) and not wert.is_finite():
            raise MalformedTransactionError(tx.id, f"{name} ist nicht endlich: {wert}")
    if tx.menge <= 0:
        raise MalformedTransactionError(tx.id, f"Menge muss positiv sein: {tx.menge}")
    if tx.wert_eur < 0:
        raise MalformedTransactionError(tx.id, f"Wert darf nicht negativ sein: {tx.wert_eur}")


def auf_kalendertag(tx: Transaction) -> Transaction:
    """Kürzt einen Zeitstempel auf den Kalendertag (Haltefrist zählt Tage)."""
    if isinstance(tx.datum, datetime):
        return dataclasses.replace(tx, datum=tx.datum.date())
    return tx


def sortiere_chronologisch(transaktionen: list[Transaction]) -> list[Transaction]:
    """Sortiert nach Datum; bei gleichem Datum bleibt die Eingabereihenfolge."""
    return sorted(transaktionen, key=lambda tx: tx.datum)


def vorbereite_transaktionen(transaktionen: list[Transaction]) -> list[Transaction]:
    """Prüft alle Transaktionen (fail fast) und sortiert sie chronologisch.

    Zeitstempel mit Uhrzeit werden dabei auf den Kalendertag gekürzt.
    """
    for tx in transaktionen:
        pruefe_transaktion(tx)
    return sortiere_chronologisch([auf_kalendertag(tx) for tx in transaktionen])


def buche(buch: FifoBuch, tx: Transaction):
    """Bucht eine Transaktion ins FIFO-Buch.

    Gibt bei Verkäufen die verbrauchten Fragmente zurück, sonst eine leere Liste.
    """
    if tx.typ in ZUGANGS_TYPEN:
        buch.kauf(tx.asset, tx.datum, tx.menge, tx.wert_eur / tx.menge)
        return []
    return buch.verkauf(tx.asset, tx.datum, tx.menge)


def baue_fifo_buch(transaktionen: list[Transaction]) -> FifoBuch:
    """Spielt die komplette Historie ab und gibt den heutigen FIFO-Stand zurück."""
    buch = FifoBuch()
    sortiert = vorbereite_transaktionen(transaktionen)
    for tx in sortiert:
        buche(buch, tx)
    logger.debug(
        "FIFO-Buch aus %d Transaktionen, %d Assets",
        len(sortiert), len(buch.assets()),
    )
    return buch
