"""Staking-Erträge und Freigrenze gem. § 22 Nr. 3 EStG.

Die Freigrenze ist keine Freibetragsregel: wird sie überschritten, sind
sämtliche Staking-Erträge des Jahres steuerpflichtig, nicht nur der Teil
oberhalb der Grenze.
"""

from decimal import Decimal
from typing import Optional

from kryptotax.engine.tax_params import get_staking_freigrenze
from kryptotax.engine.transaktionen import vorbereite_transaktionen
from kryptotax.models.tax import StakingFortschritt
from kryptotax.models.transaktion import Transaction, TransaktionsTyp

HUNDERT = Decimal("100")


def resolve_freigrenze(jahr: int, freigrenze: Optional[Decimal] = None) -> Decimal:
    """Explizite Freigrenze oder Wert aus den Steuerparametern."""
    if freigrenze is None:
        return get_staking_freigrenze(jahr)
    if freigrenze < 0:
        raise ValueError(f"Freigrenze darf nicht negativ sein: {freigrenze}")
    return Decimal(freigrenze)


def staking_im_jahr(
    transaktionen: list[Transaction], jahr: int
) -> list[Transaction]:
    return [
        tx for tx in transaktionen
        if tx.typ == TransaktionsTyp.STAKING and tx.datum.year == jahr
    ]


def summe_staking(transaktionen: list[Transaction], jahr: int) -> Decimal:
    """Summe der Staking-Erträge eines Jahres."""
    return sum(
        (tx.wert_eur for tx in staking_im_jahr(transaktionen, jahr)),
        Decimal("0"),
    )


def ist_freigrenze_ueberschritten(summe: Decimal, freigrenze: Decimal) -> bool:
    return summe > freigrenze


def berechne_staking_fortschritt(
    transaktionen: list[Transaction],
    jahr: int,
    freigrenze: Optional[Decimal] = None,
) -> StakingFortschritt:
    """Wie weit ist die Freigrenze im Jahr ausgeschöpft?"""
    grenze = resolve_freigrenze(jahr, freigrenze)
    gesamt = summe_staking(vorbereite_transaktionen(transaktionen), jahr)

    if grenze > 0:
        prozent = min(HUNDERT, gesamt / grenze * HUNDERT)
    else:
        prozent = HUNDERT if gesamt > 0 else Decimal("0")

    return StakingFortschritt(
        gesamt=gesamt,
        freigrenze=grenze,
        verbleibend=max(Decimal("0"), grenze - gesamt),
        prozent=prozent,
        ueberschritten=ist_freigrenze_ueberschritten(gesamt, grenze),
    )
