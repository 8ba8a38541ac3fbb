"""Haltefrist (§ 23 Abs. 1 Nr. 2 EStG) und Prognose steuerfreier Termine."""

import logging
from datetime import date, timedelta
from typing import Optional

from kryptotax.engine.fifo import FifoBuch
from kryptotax.engine.tax_params import get_haltefrist_tage
from kryptotax.engine.transaktionen import baue_fifo_buch
from kryptotax.models.tax import SteuerfreiTermin
from kryptotax.models.transaktion import Transaction

logger = logging.getLogger(__name__)


def resolve_haltefrist(jahr: int, haltefrist_tage: Optional[int] = None) -> int:
    """Explizite Haltefrist oder Wert aus den Steuerparametern."""
    if haltefrist_tage is None:
        return get_haltefrist_tage(jahr)
    if haltefrist_tage < 0:
        raise ValueError(f"Haltefrist darf nicht negativ sein: {haltefrist_tage}")
    return haltefrist_tage


def ist_steuerfrei(haltedauer_tage: int, haltefrist_tage: int) -> bool:
    """Haltefrist erfüllt? Genau ``haltefrist_tage`` Tage reichen aus."""
    return haltedauer_tage >= haltefrist_tage


def steuerfrei_ab(kaufdatum: date, haltefrist_tage: int) -> date:
    return kaufdatum + timedelta(days=haltefrist_tage)


def _termine_aus_buch(
    buch: FifoBuch, haltefrist_tage: int
) -> list[SteuerfreiTermin]:
    termine = []
    for asset in buch.assets():
        bestand = buch.bestand(asset)
        lot = bestand.aeltestes_lot()
        if lot is None:
            termine.append(SteuerfreiTermin(asset=asset, datum=None))
            continue
        termine.append(
            SteuerfreiTermin(
                asset=asset,
                datum=steuerfrei_ab(lot.kaufdatum, haltefrist_tage),
                menge=lot.verbleibend,
            )
        )
    return termine


def steuerfreie_termine(
    transaktionen: list[Transaction],
    haltefrist_tage: Optional[int] = None,
    stichtag: Optional[date] = None,
) -> list[SteuerfreiTermin]:
    """Für jedes Asset: ab wann ist das älteste verbleibende Lot steuerfrei?

    Assets ohne Restbestand erhalten ``datum=None``. Die Reihenfolge folgt
    dem ersten Auftreten des Assets in der Historie.
    """
    stichtag = stichtag or date.today()
    frist = resolve_haltefrist(stichtag.year, haltefrist_tage)
    termine = _termine_aus_buch(baue_fifo_buch(transaktionen), frist)
    for t in termine:
        if t.datum is not None:
            t.tage_bis_steuerfrei = max(0, (t.datum - stichtag).days)
    return termine


def anstehende_steuerfreie_termine(
    transaktionen: list[Transaction],
    haltefrist_tage: Optional[int] = None,
    stichtag: Optional[date] = None,
) -> list[SteuerfreiTermin]:
    """Nur Assets, deren ältestes Lot nach dem Stichtag steuerfrei wird.

    Ein Lot, das am Stichtag genau die Haltefrist erreicht, ist bereits
    steuerfrei und wird nicht aufgeführt. Sortiert nach Resttagen.
    """
    stichtag = stichtag or date.today()
    termine = [
        t for t in steuerfreie_termine(transaktionen, haltefrist_tage, stichtag)
        if t.datum is not None and t.datum > stichtag
    ]
    termine.sort(key=lambda t: t.tage_bis_steuerfrei)
    logger.debug("%d anstehende steuerfreie Termine ab %s", len(termine), stichtag)
    return termine


def anstehende_steuerfreie_lots(
    transaktionen: list[Transaction],
    haltefrist_tage: Optional[int] = None,
    stichtag: Optional[date] = None,
) -> list[SteuerfreiTermin]:
    """Jedes verbleibende Lot, das nach dem Stichtag steuerfrei wird."""
    stichtag = stichtag or date.today()
    frist = resolve_haltefrist(stichtag.year, haltefrist_tage)
    buch = baue_fifo_buch(transaktionen)

    termine = []
    for asset in buch.assets():
        for lot in buch.bestand(asset).bestand():
            datum = steuerfrei_ab(lot.kaufdatum, frist)
            if datum > stichtag:
                termine.append(
                    SteuerfreiTermin(
                        asset=asset,
                        datum=datum,
                        menge=lot.verbleibend,
                        tage_bis_steuerfrei=(datum - stichtag).days,
                    )
                )
    termine.sort(key=lambda t: t.tage_bis_steuerfrei)
    return termine
