"""Datenmodelle für Steuerergebnisse."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from kryptotax.models.transaktion import Transaction


@dataclass
class VerkauftePosition:
    """Ein bei Verkauf (teilweise) aufgelöstes FIFO-Lot."""

    asset: str
    kaufdatum: date
    verkaufsdatum: date
    menge: Decimal
    einstandskurs: Decimal

    @property
    def haltedauer_tage(self) -> int:
        return (self.verkaufsdatum - self.kaufdatum).days

    @property
    def kostenbasis(self) -> Decimal:
        return self.menge * self.einstandskurs

    def gewinn(self, verkaufskurs: Decimal) -> Decimal:
        """Gewinn dieses Fragments bei gegebenem Verkaufskurs pro Einheit."""
        return self.menge * (verkaufskurs - self.einstandskurs)


@dataclass
class VerkaufsAnalyse:
    """Steuerliche Auswertung eines Verkaufs im Zieljahr.

    ``haltedauer_tage`` ist die Haltedauer des ersten verbrauchten Lots und
    dient nur der Anzeige. Über die Steuerfreiheit wird pro Lot-Fragment
    entschieden, ``ist_steuerfrei`` ist nur wahr, wenn alle Fragmente die
    Haltefrist erfüllen.
    """

    transaktion: Transaction
    menge: Decimal
    erloes: Decimal
    kostenbasis: Decimal
    gewinn: Decimal
    gewinn_steuerpflichtig: Decimal
    gewinn_steuerfrei: Decimal
    ist_steuerfrei: bool
    haltedauer_tage: int
    positionen: list[VerkauftePosition] = field(default_factory=list)


@dataclass
class StakingEintrag:
    """Ein Staking-Reward im Zieljahr."""

    transaktion: Transaction
    menge: Decimal
    wert: Decimal
    steuerpflichtig: bool


Steuerposten = Union[VerkaufsAnalyse, StakingEintrag]


@dataclass
class JahresSteuerErgebnis:
    """Aggregiertes Steuerergebnis eines Jahres (§ 23 und § 22 Nr. 3 EStG)."""

    jahr: int
    gewinne_gesamt: Decimal = Decimal("0")
    gewinne_steuerpflichtig: Decimal = Decimal("0")
    gewinne_steuerfrei: Decimal = Decimal("0")
    staking_ertraege: Decimal = Decimal("0")
    ist_steuerpflichtig: bool = False
    staking_freigrenze_ueberschritten: bool = False
    transaktionen: list[Steuerposten] = field(default_factory=list)

    @property
    def verkaeufe(self) -> list[VerkaufsAnalyse]:
        return [p for p in self.transaktionen if isinstance(p, VerkaufsAnalyse)]

    @property
    def staking(self) -> list[StakingEintrag]:
        return [p for p in self.transaktionen if isinstance(p, StakingEintrag)]


@dataclass
class StakingFortschritt:
    """Stand der Staking-Erträge gegenüber der Freigrenze."""

    gesamt: Decimal
    freigrenze: Decimal
    verbleibend: Decimal
    prozent: Decimal
    ueberschritten: bool


@dataclass
class SteuerfreiTermin:
    """Datum, ab dem ein Bestand die Haltefrist erfüllt."""

    asset: str
    datum: Optional[date]
    menge: Decimal = Decimal("0")
    tage_bis_steuerfrei: Optional[int] = None


@dataclass
class AssetBestand:
    """Aktueller Bestand eines Assets nach FIFO."""

    asset: str
    menge: Decimal
    einstandswert: Decimal
    durchschnittskurs: Decimal
    anzahl_lots: int


@dataclass
class Steuerbericht:
    """Alle Auswertungen für ein Jahr, gebündelt für die Anzeige."""

    ergebnis: JahresSteuerErgebnis
    staking: StakingFortschritt
    steuerfrei_termine: list[SteuerfreiTermin] = field(default_factory=list)
