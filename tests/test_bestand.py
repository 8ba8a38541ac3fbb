"""Tests für die Bestandsübersicht."""

from datetime import date
from decimal import Decimal

from kryptotax.engine.bestand import berechne_bestaende, gesamt_einstandswert
from kryptotax.models.transaktion import Transaction, TransaktionsTyp


def _tx(tx_id, datum, typ, asset, menge, wert):
    return Transaction(
        id=tx_id,
        datum=datum,
        kryptowaehrung=asset,
        menge=Decimal(menge),
        wert_eur=Decimal(wert),
        typ=typ,
    )


class TestBerechneBestaende:
    def test_fifo_einstandswert(self, btc_szenario):
        """Einstandswert stammt aus den offenen Lots, nicht aus dem Kaufdurchschnitt."""
        bestaende = berechne_bestaende(btc_szenario)
        assert len(bestaende) == 1
        btc = bestaende[0]
        assert btc.asset == "BTC"
        assert btc.menge == Decimal("0.5")
        assert btc.einstandswert == Decimal("10000")
        assert btc.durchschnittskurs == Decimal("20000")
        assert btc.anzahl_lots == 1

    def test_leere_assets_entfallen(self):
        k, v = TransaktionsTyp.KAUF, TransaktionsTyp.VERKAUF
        txs = [
            _tx("k1", date(2023, 1, 1), k, "SOL", "10", "200"),
            _tx("v1", date(2023, 2, 1), v, "SOL", "10", "300"),
            _tx("k2", date(2023, 1, 1), k, "ADA", "100", "30"),
        ]
        bestaende = berechne_bestaende(txs)
        assert [b.asset for b in bestaende] == ["ADA"]

    def test_sortiert_und_summe(self):
        k, s = TransaktionsTyp.KAUF, TransaktionsTyp.STAKING
        txs = [
            _tx("k1", date(2023, 1, 1), k, "ETH", "2", "4000"),
            _tx("s1", date(2023, 2, 1), s, "ETH", "0.5", "900"),
            _tx("k2", date(2023, 1, 1), k, "BTC", "0.1", "2500"),
        ]
        bestaende = berechne_bestaende(txs)
        assert [b.asset for b in bestaende] == ["BTC", "ETH"]
        assert bestaende[1].menge == Decimal("2.5")
        assert bestaende[1].durchschnittskurs == Decimal("1960")
        assert gesamt_einstandswert(bestaende) == Decimal("7400")
