"""Datenmodelle für Krypto-Transaktionen und FIFO-Lots."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransaktionsTyp(Enum):
    KAUF = "buy"
    VERKAUF = "sell"
    STAKING = "staking"


@dataclass(frozen=True)
class Transaction:
    """Eine einzelne Transaktion eines Nutzers.

    ``wert_eur`` ist der Gesamtbetrag der Transaktion (Kaufpreis, Verkaufserlös
    bzw. Marktwert des Staking-Rewards bei Zufluss), kein Stückpreis.
    """

    id: str
    datum: date
    kryptowaehrung: str
    menge: Decimal
    wert_eur: Decimal
    typ: TransaktionsTyp
    notiz: str = ""
    exchange: Optional[str] = None

    @property
    def asset(self) -> str:
        """Normalisiertes Asset-Symbol (Großbuchstaben)."""
        return self.kryptowaehrung.strip().upper()

    @property
    def kurs(self) -> Decimal:
        """Preis pro Einheit."""
        return self.wert_eur / self.menge


@dataclass
class FifoPosition:
    """Ein einzelnes FIFO-Lot (Kauf oder Staking-Zufluss)."""

    asset: str
    kaufdatum: date
    menge: Decimal
    einstandskurs: Decimal
    verbleibend: Decimal
