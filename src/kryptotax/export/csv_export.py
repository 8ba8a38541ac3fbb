"""CSV Export der Berechnungsergebnisse."""

import csv
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path

from kryptotax.models.tax import (
    JahresSteuerErgebnis,
    StakingEintrag,
    VerkaufsAnalyse,
)
from kryptotax.models.transaktion import Transaction

_TYP_LABEL = {
    "buy": "KAUF",
    "sell": "VERKAUF",
    "staking": "STAKING",
}


def _format_decimal(value: Decimal, german: bool = True, stellen: int = 2) -> str:
    """Formatiere Decimal für CSV."""
    s = f"{Decimal(value).quantize(Decimal(1).scaleb(-stellen), ROUND_HALF_UP):f}"
    if german:
        s = s.replace(".", ",")
    return s


def _format_menge(value: Decimal, german: bool = True) -> str:
    return _format_decimal(value, german, stellen=8)


def export_jahresergebnis(
    ergebnis: JahresSteuerErgebnis,
    filepath: str | Path,
    german_format: bool = True,
) -> None:
    """Exportiere alle Einzelposten eines Jahres plus Summenzeilen als CSV."""
    filepath = Path(filepath)
    header = [
        "Datum",
        "Typ",
        "Kryptowährung",
        "Menge",
        "Erlös / Wert",
        "Kostenbasis",
        "Gewinn",
        "davon steuerpflichtig",
        "davon steuerfrei",
        "Haltedauer (Tage)",
        "Steuerpflichtig",
    ]

    rows = []
    for posten in ergebnis.transaktionen:
        tx = posten.transaktion
        datum = tx.datum.strftime("%d.%m.%Y")
        if isinstance(posten, VerkaufsAnalyse):
            rows.append([
                datum,
                "VERKAUF",
                tx.asset,
                _format_menge(posten.menge, german_format),
                _format_decimal(posten.erloes, german_format),
                _format_decimal(posten.kostenbasis, german_format),
                _format_decimal(posten.gewinn, german_format),
                _format_decimal(posten.gewinn_steuerpflichtig, german_format),
                _format_decimal(posten.gewinn_steuerfrei, german_format),
                str(posten.haltedauer_tage),
                "nein" if posten.ist_steuerfrei else "ja",
            ])
        elif isinstance(posten, StakingEintrag):
            rows.append([
                datum,
                "STAKING",
                tx.asset,
                _format_menge(posten.menge, german_format),
                _format_decimal(posten.wert, german_format),
                "",
                "",
                "",
                "",
                "",
                "ja" if posten.steuerpflichtig else "nein",
            ])

    rows.append([])
    rows.append(["Gewinne gesamt", _format_decimal(ergebnis.gewinne_gesamt, german_format)])
    rows.append(["Gewinne steuerpflichtig", _format_decimal(ergebnis.gewinne_steuerpflichtig, german_format)])
    rows.append(["Gewinne steuerfrei", _format_decimal(ergebnis.gewinne_steuerfrei, german_format)])
    rows.append(["Staking-Erträge", _format_decimal(ergebnis.staking_ertraege, german_format)])

    _write_csv(filepath, header, rows, german_format)


def export_transaktionen(
    transaktionen: list[Transaction],
    filepath: str | Path,
    german_format: bool = True,
) -> None:
    """Exportiere eine Transaktionsliste als CSV."""
    filepath = Path(filepath)
    header = [
        "Datum",
        "Typ",
        "Kryptowährung",
        "Menge",
        "Preis (EUR)",
        "Gesamt (EUR)",
        "Exchange",
        "Notizen",
    ]

    rows = []
    for tx in sorted(transaktionen, key=lambda t: t.datum):
        rows.append([
            tx.datum.strftime("%d.%m.%Y"),
            _TYP_LABEL[tx.typ.value],
            tx.asset,
            _format_menge(tx.menge, german_format),
            _format_decimal(tx.kurs, german_format),
            _format_decimal(tx.wert_eur, german_format),
            tx.exchange or "",
            tx.notiz,
        ])

    _write_csv(filepath, header, rows, german_format)


def _write_csv(
    filepath: Path,
    header: list[str],
    rows: list[list[str]],
    german_format: bool,
) -> None:
    """Schreibe CSV-Datei mit UTF-8 BOM für Excel-Kompatibilität."""
    delimiter = ";" if german_format else ","
    with open(filepath, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(header)
        writer.writerows(rows)
