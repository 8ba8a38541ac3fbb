"""Datenmodelle für Transaktionen und Steuerergebnisse."""

from kryptotax.models.transaktion import (
    TransaktionsTyp,
    Transaction,
    FifoPosition,
)
from kryptotax.models.tax import (
    VerkauftePosition,
    VerkaufsAnalyse,
    StakingEintrag,
    JahresSteuerErgebnis,
    StakingFortschritt,
    SteuerfreiTermin,
    AssetBestand,
    Steuerbericht,
)
