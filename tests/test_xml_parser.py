"""Tests für den XML-Parser der Transaktionshistorie."""

from datetime import date
from decimal import Decimal

import pytest
from lxml import etree

from kryptotax.engine.errors import MalformedTransactionError
from kryptotax.models.transaktion import TransaktionsTyp
from kryptotax.parser.xml_parser import parse_transaktionen, parse_transaktionen_datei


def _parse(xml: str):
    return parse_transaktionen(etree.fromstring(xml))


class TestXMLParser:
    def test_parse_datei(self, sample_xml):
        txs = parse_transaktionen_datei(sample_xml)
        assert len(txs) == 6
        assert [t.id for t in txs] == ["t1", "t2", "t3", "t4", "t5", "t6"]

    def test_typen(self, sample_xml):
        txs = parse_transaktionen_datei(sample_xml)
        typen = [t.typ for t in txs]
        assert typen.count(TransaktionsTyp.KAUF) == 3
        assert typen.count(TransaktionsTyp.VERKAUF) == 1
        assert typen.count(TransaktionsTyp.STAKING) == 2

    def test_werte(self, sample_xml):
        txs = {t.id: t for t in parse_transaktionen_datei(sample_xml)}
        verkauf = txs["t5"]
        assert verkauf.menge == Decimal("1.5")
        assert verkauf.wert_eur == Decimal("45000.00")
        assert verkauf.datum == date(2024, 2, 1)
        assert verkauf.exchange == "Kraken"
        assert txs["t6"].notiz == "Sparplan"
        assert txs["t1"].notiz == ""

    def test_asset_gross(self, sample_xml):
        txs = {t.id: t for t in parse_transaktionen_datei(sample_xml)}
        assert txs["t2"].kryptowaehrung == "BTC"

    def test_uhrzeit_wird_abgeschnitten(self, sample_xml):
        txs = {t.id: t for t in parse_transaktionen_datei(sample_xml)}
        assert txs["t4"].datum == date(2023, 9, 15)

    def test_deutsches_format(self):
        txs = _parse(
            "<transactions><transaction>"
            "<date>15.03.2023</date><type>Kauf</type><asset>eth</asset>"
            "<amount>0,5</amount><value>800,50</value>"
            "</transaction></transactions>"
        )
        assert txs[0].id == "tx-1"
        assert txs[0].datum == date(2023, 3, 15)
        assert txs[0].menge == Decimal("0.5")
        assert txs[0].wert_eur == Decimal("800.50")
        assert txs[0].kryptowaehrung == "ETH"


class TestXMLParserFehler:
    def test_unbekannter_typ(self):
        with pytest.raises(MalformedTransactionError, match="unbekannter Typ"):
            _parse(
                "<transactions><transaction id='x'>"
                "<date>2023-01-01</date><type>transfer</type>"
                "<cryptocurrency>BTC</cryptocurrency>"
                "<amount>1</amount><value>1</value>"
                "</transaction></transactions>"
            )

    def test_keine_zahl(self):
        with pytest.raises(MalformedTransactionError, match="keine Zahl"):
            _parse(
                "<transactions><transaction id='x'>"
                "<date>2023-01-01</date><type>buy</type>"
                "<cryptocurrency>BTC</cryptocurrency>"
                "<amount>abc</amount><value>1</value>"
                "</transaction></transactions>"
            )

    def test_fehlendes_datum(self):
        with pytest.raises(MalformedTransactionError, match="date"):
            _parse(
                "<transactions><transaction id='x'>"
                "<type>buy</type><cryptocurrency>BTC</cryptocurrency>"
                "<amount>1</amount><value>1</value>"
                "</transaction></transactions>"
            )

    def test_ungueltiges_datum(self):
        with pytest.raises(MalformedTransactionError, match="Datumsformat"):
            _parse(
                "<transactions><transaction id='x'>"
                "<date>gestern</date><type>buy</type>"
                "<cryptocurrency>BTC</cryptocurrency>"
                "<amount>1</amount><value>1</value>"
                "</transaction></transactions>"
            )

    def test_kaputtes_xml(self, tmp_path):
        datei = tmp_path / "kaputt.xml"
        datei.write_text("<transactions><transaction>", encoding="utf-8")
        with pytest.raises(ValueError, match="Ungültige XML-Datei"):
            parse_transaktionen_datei(datei)
