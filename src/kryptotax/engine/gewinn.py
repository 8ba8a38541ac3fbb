"""Jahressteuer: FIFO-Gewinnermittlung für private Veräußerungsgeschäfte.

Verkäufe werden lotweise ausgewertet. Ein Verkauf, der gleichzeitig aus
Lots innerhalb und außerhalb der Haltefrist bedient wird, teilt seinen
Gewinn entsprechend in einen steuerpflichtigen und einen steuerfreien Teil.
"""

import logging
from decimal import Decimal
from typing import Optional

from kryptotax.engine.fifo import FifoBuch
from kryptotax.engine.haltefrist import ist_steuerfrei, resolve_haltefrist
from kryptotax.engine.staking import (
    ist_freigrenze_ueberschritten,
    resolve_freigrenze,
    summe_staking,
)
from kryptotax.engine.transaktionen import buche, vorbereite_transaktionen
from kryptotax.models.tax import (
    JahresSteuerErgebnis,
    StakingEintrag,
    VerkaufsAnalyse,
    VerkauftePosition,
)
from kryptotax.models.transaktion import Transaction, TransaktionsTyp

logger = logging.getLogger(__name__)


def analysiere_verkauf(
    tx: Transaction,
    positionen: list[VerkauftePosition],
    haltefrist_tage: int,
) -> VerkaufsAnalyse:
    """Gewinn, Kostenbasis und Steuerfreiheit eines Verkaufs aus seinen Fragmenten."""
    verkaufskurs = tx.wert_eur / tx.menge
    steuerpflichtig = Decimal("0")
    steuerfrei = Decimal("0")
    gesamt = Decimal("0")
    kostenbasis = Decimal("0")

    for p in positionen:
        gewinn = p.gewinn(verkaufskurs)
        gesamt += gewinn
        kostenbasis += p.kostenbasis
        if ist_steuerfrei(p.haltedauer_tage, haltefrist_tage):
            steuerfrei += gewinn
        else:
            steuerpflichtig += gewinn

    return VerkaufsAnalyse(
        transaktion=tx,
        menge=tx.menge,
        erloes=tx.wert_eur,
        kostenbasis=kostenbasis,
        gewinn=gesamt,
        gewinn_steuerpflichtig=steuerpflichtig,
        gewinn_steuerfrei=steuerfrei,
        ist_steuerfrei=all(
            ist_steuerfrei(p.haltedauer_tage, haltefrist_tage) for p in positionen
        ),
        haltedauer_tage=positionen[0].haltedauer_tage if positionen else 0,
        positionen=positionen,
    )


def berechne_jahressteuer(
    transaktionen: list[Transaction],
    jahr: int,
    haltefrist_tage: Optional[int] = None,
    freigrenze: Optional[Decimal] = None,
) -> JahresSteuerErgebnis:
    """Berechne das Steuerergebnis eines Jahres.

    Die komplette Historie wird abgespielt, weil Käufe aus Vorjahren den
    FIFO-Verbrauch im Zieljahr bestimmen. Nur Transaktionen im Zieljahr
    fließen in Summen und Einzelposten ein.
    """
    frist = resolve_haltefrist(jahr, haltefrist_tage)
    grenze = resolve_freigrenze(jahr, freigrenze)
    sortiert = vorbereite_transaktionen(transaktionen)

    staking_summe = summe_staking(sortiert, jahr)
    ueberschritten = ist_freigrenze_ueberschritten(staking_summe, grenze)

    buch = FifoBuch()
    ergebnis = JahresSteuerErgebnis(
        jahr=jahr,
        staking_ertraege=staking_summe,
        staking_freigrenze_ueberschritten=ueberschritten,
    )

    for tx in sortiert:
        positionen = buche(buch, tx)
        if tx.datum.year != jahr:
            continue

        if tx.typ == TransaktionsTyp.VERKAUF:
            analyse = analysiere_verkauf(tx, positionen, frist)
            ergebnis.gewinne_steuerpflichtig += analyse.gewinn_steuerpflichtig
            ergebnis.gewinne_steuerfrei += analyse.gewinn_steuerfrei
            ergebnis.transaktionen.append(analyse)
        elif tx.typ == TransaktionsTyp.STAKING:
            ergebnis.transaktionen.append(
                StakingEintrag(
                    transaktion=tx,
                    menge=tx.menge,
                    wert=tx.wert_eur,
                    steuerpflichtig=ueberschritten,
                )
            )

    ergebnis.gewinne_gesamt = (
        ergebnis.gewinne_steuerpflichtig + ergebnis.gewinne_steuerfrei
    )
    ergebnis.ist_steuerpflichtig = (
        ergebnis.gewinne_steuerpflichtig > 0 or ueberschritten
    )

    logger.debug(
        "Jahr %d: %d Posten, steuerpflichtig %s, steuerfrei %s, Staking %s",
        jahr,
        len(ergebnis.transaktionen),
        ergebnis.gewinne_steuerpflichtig,
        ergebnis.gewinne_steuerfrei,
        staking_summe,
    )
    return ergebnis
