"""FIFO-Bestandsführung gem. § 23 Abs. 1 Nr. 2 Satz 3 EStG."""

import copy
import logging
from datetime import date
from decimal import Decimal

from kryptotax.engine.errors import InsufficientLotsError
from kryptotax.models.transaktion import FifoPosition
from kryptotax.models.tax import VerkauftePosition

logger = logging.getLogger(__name__)


class FifoBestand:
    """Verwaltet FIFO-Lots für ein einzelnes Asset."""

    def __init__(self, asset: str):
        self.asset = asset
        self._lots: list[FifoPosition] = []

    def kauf(self, datum: date, menge: Decimal, einstandskurs: Decimal) -> None:
        """Fügt ein neues Lot hinzu."""
        self._lots.append(
            FifoPosition(
                asset=self.asset,
                kaufdatum=datum,
                menge=menge,
                einstandskurs=einstandskurs,
                verbleibend=menge,
            )
        )

    def verkauf(self, datum: date, menge: Decimal) -> list[VerkauftePosition]:
        """Verbraucht ``menge`` FIFO-konform und gibt die Fragmente zurück.

        Reicht der Bestand nicht, wird nichts verbraucht und
        InsufficientLotsError geworfen.
        """
        verfuegbar = self.gesamtmenge()
        if menge > verfuegbar:
            raise InsufficientLotsError(self.asset, menge, verfuegbar)

        offen = menge
        ergebnis: list[VerkauftePosition] = []

        while offen > 0 and self._lots:
            lot = self._lots[0]
            entnommen = min(offen, lot.verbleibend)

            ergebnis.append(
                VerkauftePosition(
                    asset=self.asset,
                    kaufdatum=lot.kaufdatum,
                    verkaufsdatum=datum,
                    menge=entnommen,
                    einstandskurs=lot.einstandskurs,
                )
            )

            lot.verbleibend -= entnommen
            if lot.verbleibend <= 0:
                self._lots.pop(0)

            offen -= entnommen

        logger.debug(
            "%s: %s verkauft am %s aus %d Lot(s)",
            self.asset, menge, datum, len(ergebnis),
        )
        return ergebnis

    def bestand(self) -> list[FifoPosition]:
        """Kopie aller offenen Lots, ältestes zuerst."""
        return copy.deepcopy(self._lots)

    def aeltestes_lot(self) -> FifoPosition | None:
        return self._lots[0] if self._lots else None

    def gesamtmenge(self) -> Decimal:
        """Summe der verbleibenden Mengen aller Lots."""
        return sum((lot.verbleibend for lot in self._lots), Decimal("0"))

    def einstandswert(self) -> Decimal:
        """Anschaffungskosten des verbleibenden Bestands."""
        return sum(
            (lot.verbleibend * lot.einstandskurs for lot in self._lots),
            Decimal("0"),
        )

    def gewinn_bei_verkauf(
        self, menge: Decimal, verkaufskurs: Decimal, datum: date | None = None
    ) -> Decimal:
        """Simuliert Verkauf ohne Bestand zu verändern. Gibt den Gewinn zurück."""
        sim = FifoBestand(self.asset)
        sim._lots = copy.deepcopy(self._lots)
        positionen = sim.verkauf(datum or date.today(), menge)
        return sum((p.gewinn(verkaufskurs) for p in positionen), Decimal("0"))


class FifoBuch:
    """FIFO-Bestände aller Assets für genau eine Berechnung.

    Wird pro Aufruf neu angelegt und vom Aufrufer gehalten, damit zwischen
    Berechnungen (verschiedene Nutzer, parallele Requests) kein Zustand
    geteilt wird.
    """

    def __init__(self):
        self._bestaende: dict[str, FifoBestand] = {}

    def bestand(self, asset: str) -> FifoBestand:
        """FIFO-Bestand eines Assets, wird bei Bedarf angelegt."""
        if asset not in self._bestaende:
            self._bestaende[asset] = FifoBestand(asset)
        return self._bestaende[asset]

    def kauf(
        self, asset: str, datum: date, menge: Decimal, einstandskurs: Decimal
    ) -> None:
        self.bestand(asset).kauf(datum, menge, einstandskurs)

    def verkauf(
        self, asset: str, datum: date, menge: Decimal
    ) -> list[VerkauftePosition]:
        return self.bestand(asset).verkauf(datum, menge)

    def assets(self) -> list[str]:
        """Alle Assets in der Reihenfolge ihres ersten Auftretens."""
        return list(self._bestaende)
