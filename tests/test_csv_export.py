"""Tests für CSV Export."""

from datetime import date
from decimal import Decimal

from kryptotax.engine.gewinn import berechne_jahressteuer
from kryptotax.export.csv_export import export_jahresergebnis, export_transaktionen
from kryptotax.models.tax import JahresSteuerErgebnis
from kryptotax.models.transaktion import Transaction, TransaktionsTyp


class TestCSVExport:
    def test_jahresergebnis_export(self, btc_szenario, tmp_path):
        """CSV-Export eines Verkaufs über zwei Lots."""
        erg = berechne_jahressteuer(btc_szenario, 2024)

        filepath = tmp_path / "jahr.csv"
        export_jahresergebnis(erg, filepath)

        content = filepath.read_text(encoding="utf-8-sig")
        lines = content.splitlines()
        assert lines[0].startswith("Datum;Typ;Kryptowährung")
        assert "01.02.2024;VERKAUF;BTC;1,50000000;45000,00;20000,00;25000,00;5000,00;20000,00;396;ja" in content
        assert "Gewinne steuerfrei;20000,00" in content

    def test_staking_zeilen(self, tmp_path):
        txs = [
            Transaction(
                id=f"s{i}",
                datum=date(2023, 2, i),
                kryptowaehrung="ETH",
                menge=Decimal("0.1"),
                wert_eur=Decimal("150"),
                typ=TransaktionsTyp.STAKING,
            )
            for i in (1, 2)
        ]
        erg = berechne_jahressteuer(txs, 2023)

        filepath = tmp_path / "staking.csv"
        export_jahresergebnis(erg, filepath)

        content = filepath.read_text(encoding="utf-8-sig")
        assert content.count(";STAKING;ETH;") == 2
        assert "Staking-Erträge;300,00" in content

    def test_bom_present(self, tmp_path):
        """UTF-8 BOM für Excel-Kompatibilität."""
        filepath = tmp_path / "bom.csv"
        export_jahresergebnis(JahresSteuerErgebnis(jahr=2023), filepath)

        raw = filepath.read_bytes()
        assert raw[:3] == b"\xef\xbb\xbf"

    def test_englisches_format(self, btc_szenario, tmp_path):
        erg = berechne_jahressteuer(btc_szenario, 2024)
        filepath = tmp_path / "en.csv"
        export_jahresergebnis(erg, filepath, german_format=False)

        content = filepath.read_text(encoding="utf-8-sig")
        assert "45000.00,20000.00,25000.00" in content

    def test_transaktionen_export(self, btc_szenario, tmp_path):
        filepath = tmp_path / "tx.csv"
        export_transaktionen(list(reversed(btc_szenario)), filepath)

        lines = filepath.read_text(encoding="utf-8-sig").splitlines()
        assert len(lines) == 4
        assert lines[1].startswith("01.01.2023;KAUF;BTC;1,00000000;10000,00;10000,00")
        assert lines[3].startswith("01.02.2024;VERKAUF;BTC;1,50000000;30000,00;45000,00")

    def test_halbe_cents_werden_aufgerundet(self, tmp_path):
        """Kaufmännische Rundung wie in der CLI-Ausgabe."""
        txs = [
            Transaction(
                id="s1",
                datum=date(2023, 3, 1),
                kryptowaehrung="DOT",
                menge=Decimal("0.000000025"),
                wert_eur=Decimal("0.125"),
                typ=TransaktionsTyp.STAKING,
            )
        ]
        erg = berechne_jahressteuer(txs, 2023)

        filepath = tmp_path / "rundung.csv"
        export_jahresergebnis(erg, filepath)

        content = filepath.read_text(encoding="utf-8-sig")
        assert "01.03.2023;STAKING;DOT;0,00000003;0,13;" in content
        assert "Staking-Erträge;0,13" in content
