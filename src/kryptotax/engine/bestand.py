"""Bestandsübersicht pro Asset auf Basis der FIFO-Lots."""

from decimal import Decimal

from kryptotax.engine.transaktionen import baue_fifo_buch
from kryptotax.models.tax import AssetBestand
from kryptotax.models.transaktion import Transaction


def berechne_bestaende(transaktionen: list[Transaction]) -> list[AssetBestand]:
    """Aktueller Bestand aller Assets mit Restmenge > 0.

    Der Einstandswert ergibt sich aus den noch offenen Lots, nicht aus dem
    Durchschnitt aller jemals getätigten Käufe.
    """
    buch = baue_fifo_buch(transaktionen)
    bestaende = []
    for asset in buch.assets():
        fifo = buch.bestand(asset)
        menge = fifo.gesamtmenge()
        if menge <= 0:
            continue
        wert = fifo.einstandswert()
        bestaende.append(
            AssetBestand(
                asset=asset,
                menge=menge,
                einstandswert=wert,
                durchschnittskurs=wert / menge,
                anzahl_lots=len(fifo.bestand()),
            )
        )
    return sorted(bestaende, key=lambda b: b.asset)


def gesamt_einstandswert(bestaende: list[AssetBestand]) -> Decimal:
    return sum((b.einstandswert for b in bestaende), Decimal("0"))
