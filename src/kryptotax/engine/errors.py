"""Fehlerklassen der Steuer-Engine."""

from decimal import Decimal


class InsufficientLotsError(ValueError):
    """Verkauf übersteigt den FIFO-Bestand eines Assets.

    Deutet auf eine unvollständige Transaktionshistorie hin (z.B. ein
    fehlender Kauf-Import) und wird nie stillschweigend auf 0 gekürzt.
    """

    def __init__(self, asset: str, angefordert: Decimal, verfuegbar: Decimal):
        self.asset = asset
        self.angefordert = angefordert
        self.verfuegbar = verfuegbar
        super().__init__(
            f"Nicht genügend Bestand für {asset}: {angefordert} angefordert, "
            f"{verfuegbar} verfügbar"
        )


class MalformedTransactionError(ValueError):
    """Transaktion mit ungültigen Daten (Menge, Wert, Typ, Asset)."""

    def __init__(self, transaktion_id: str, grund: str):
        self.transaktion_id = transaktion_id
        self.grund = grund
        super().__init__(f"Ungültige Transaktion {transaktion_id}: {grund}")
