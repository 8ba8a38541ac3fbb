"""Entry Point für KryptoTax (CLI)."""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from kryptotax.config import AppConfig

TWO_PLACES = Decimal("0.01")


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value.replace(",", "."))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"keine Zahl: {value}")


def _eur(value: Decimal) -> str:
    return f"{value.quantize(TWO_PLACES, ROUND_HALF_UP)} €"


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="kryptotax",
        description="KryptoTax – FIFO-Steuerrechner für Kryptowährungen",
    )
    parser.add_argument(
        "--file", "-f", required=True, help="Transaktionshistorie (XML)"
    )
    parser.add_argument(
        "--jahr", "-j", type=int, default=date.today().year, help="Steuerjahr"
    )
    parser.add_argument(
        "--stichtag",
        type=date.fromisoformat,
        help="Referenzdatum für die Haltefrist-Prognose (YYYY-MM-DD, Standard: heute)",
    )
    parser.add_argument("--export-csv", help="Jahresergebnis als CSV speichern")
    parser.add_argument("--haltefrist-tage", type=int, help="Haltefrist überschreiben")
    parser.add_argument("--freigrenze", type=_decimal, help="Staking-Freigrenze überschreiben")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug-Ausgaben")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = AppConfig(
        haltefrist_tage=args.haltefrist_tage,
        staking_freigrenze=args.freigrenze,
    )
    try:
        _run_cli(args, config)
    except (OSError, ValueError) as e:
        print(f"Fehler: {e}", file=sys.stderr)
        sys.exit(1)


def _run_cli(args, config: AppConfig):
    from kryptotax.engine.report import erstelle_steuerbericht
    from kryptotax.parser.xml_parser import parse_transaktionen_datei

    transaktionen = parse_transaktionen_datei(args.file)
    bericht = erstelle_steuerbericht(
        transaktionen, args.jahr, config=config, stichtag=args.stichtag
    )
    erg = bericht.ergebnis

    print(f"Steuerjahr {erg.jahr} ({len(transaktionen)} Transaktionen)")
    print(f"  Gewinne gesamt:          {_eur(erg.gewinne_gesamt)}")
    print(f"  davon steuerpflichtig:   {_eur(erg.gewinne_steuerpflichtig)}")
    print(f"  davon steuerfrei:        {_eur(erg.gewinne_steuerfrei)}")
    print(f"  Staking-Erträge:         {_eur(erg.staking_ertraege)}")
    print(
        f"  Freigrenze Staking:      {_eur(bericht.staking.freigrenze)} "
        f"({bericht.staking.prozent.quantize(TWO_PLACES, ROUND_HALF_UP)} % genutzt"
        f"{', überschritten' if bericht.staking.ueberschritten else ''})"
    )
    print(f"  Steuerpflichtig:         {'ja' if erg.ist_steuerpflichtig else 'nein'}")

    if bericht.steuerfrei_termine:
        print("Steuerfrei ab:")
        for t in bericht.steuerfrei_termine:
            if t.datum is None:
                print(f"  - {t.asset}: kein Bestand")
            else:
                print(f"  - {t.asset}: {t.datum.strftime('%d.%m.%Y')}")

    if args.export_csv:
        from kryptotax.export.csv_export import export_jahresergebnis

        export_jahresergebnis(erg, args.export_csv)
        print(f"CSV gespeichert: {args.export_csv}")


if __name__ == "__main__":
    main()
