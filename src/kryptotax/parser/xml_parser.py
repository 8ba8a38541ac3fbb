"""Transaktionshistorie aus XML-Datei einlesen.

Erwartetes Format::

    <transactions>
      <transaction id="tx-1">
        <date>2023-01-01</date>
        <type>buy</type>
        <cryptocurrency>BTC</cryptocurrency>
        <amount>1.5</amount>
        <value>45000.00</value>
        <exchange>Kraken</exchange>
        <note>optional</note>
      </transaction>
    </transactions>

``value`` ist der Gesamtbetrag in EUR. Fehlerhafte Einträge führen zum
Abbruch des ganzen Imports.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from lxml import etree

from kryptotax.engine.errors import MalformedTransactionError
from kryptotax.models.transaktion import Transaction, TransaktionsTyp

_TYP_MAP = {
    "buy": TransaktionsTyp.KAUF,
    "kauf": TransaktionsTyp.KAUF,
    "sell": TransaktionsTyp.VERKAUF,
    "verkauf": TransaktionsTyp.VERKAUF,
    "staking": TransaktionsTyp.STAKING,
    "reward": TransaktionsTyp.STAKING,
}


def _parse_date(date_str: str) -> date:
    """Parst ein Datum. Uhrzeiten werden auf den Kalendertag gekürzt."""
    date_str = date_str.strip()
    for fmt in ("%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%d.%m.%Y"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unbekanntes Datumsformat: {date_str}")


def _get_text(
    elem: etree._Element, tag: str, default: str | None = None
) -> str | None:
    """Hole Text eines Kind-Elements."""
    child = elem.find(tag)
    if child is not None and child.text:
        return child.text.strip()
    return default


def _to_decimal(tx_id: str, name: str, value: str | None) -> Decimal:
    if value is None:
        raise MalformedTransactionError(tx_id, f"<{name}> fehlt")
    try:
        return Decimal(value.replace(",", "."))
    except InvalidOperation:
        raise MalformedTransactionError(tx_id, f"<{name}> ist keine Zahl: {value}")


def _parse_transaction(elem: etree._Element, index: int) -> Transaction:
    tx_id = elem.get("id") or _get_text(elem, "id") or f"tx-{index}"

    typ_str = (_get_text(elem, "type", "") or "").lower()
    typ = _TYP_MAP.get(typ_str)
    if typ is None:
        raise MalformedTransactionError(tx_id, f"unbekannter Typ {typ_str!r}")

    datum_str = _get_text(elem, "date")
    if datum_str is None:
        raise MalformedTransactionError(tx_id, "<date> fehlt")
    try:
        datum = _parse_date(datum_str)
    except ValueError as e:
        raise MalformedTransactionError(tx_id, str(e))

    asset = _get_text(elem, "cryptocurrency") or _get_text(elem, "asset")
    if not asset:
        raise MalformedTransactionError(tx_id, "<cryptocurrency> fehlt")

    return Transaction(
        id=tx_id,
        datum=datum,
        kryptowaehrung=asset.upper(),
        menge=_to_decimal(tx_id, "amount", _get_text(elem, "amount")),
        wert_eur=_to_decimal(tx_id, "value", _get_text(elem, "value")),
        typ=typ,
        notiz=_get_text(elem, "note", "") or "",
        exchange=_get_text(elem, "exchange"),
    )


def parse_transaktionen(root: etree._Element) -> list[Transaction]:
    """Alle <transaction>-Elemente in Dokumentreihenfolge."""
    return [
        _parse_transaction(elem, i)
        for i, elem in enumerate(root.iter("transaction"), start=1)
    ]


def parse_transaktionen_datei(filepath: str | Path) -> list[Transaction]:
    """Lese und parse eine Transaktions-XML-Datei."""
    try:
        tree = etree.parse(str(Path(filepath)))
    except etree.XMLSyntaxError as e:
        raise ValueError(f"Ungültige XML-Datei {filepath}: {e}") from e
    return parse_transaktionen(tree.getroot())
