"""Bündelt Jahressteuer, Staking-Fortschritt und Haltefrist-Prognose."""

from datetime import date
from typing import Optional

from kryptotax.config import AppConfig
from kryptotax.engine.gewinn import berechne_jahressteuer
from kryptotax.engine.haltefrist import steuerfreie_termine
from kryptotax.engine.staking import berechne_staking_fortschritt
from kryptotax.models.tax import Steuerbericht
from kryptotax.models.transaktion import Transaction


def erstelle_steuerbericht(
    transaktionen: list[Transaction],
    jahr: int,
    config: Optional[AppConfig] = None,
    stichtag: Optional[date] = None,
) -> Steuerbericht:
    """Alle drei Auswertungen über denselben Transaktionsstand."""
    config = config or AppConfig()
    return Steuerbericht(
        ergebnis=berechne_jahressteuer(
            transaktionen,
            jahr,
            haltefrist_tage=config.haltefrist_tage,
            freigrenze=config.staking_freigrenze,
        ),
        staking=berechne_staking_fortschritt(
            transaktionen, jahr, freigrenze=config.staking_freigrenze
        ),
        steuerfrei_termine=steuerfreie_termine(
            transaktionen,
            haltefrist_tage=config.haltefrist_tage,
            stichtag=stichtag,
        ),
    )
