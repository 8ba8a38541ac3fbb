"""Zentrale Lookup-Funktion für historische Steuerparameter."""

import json
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

_DATA_FILE = Path(__file__).parent.parent / "data" / "tax_parameters.json"


@lru_cache(maxsize=1)
def _load_parameters() -> dict:
    """Lade tax_parameters.json (einmal, mit Caching)."""
    with open(_DATA_FILE, encoding="utf-8") as f:
        return json.load(f)


def get_param(param_name: str, year: int):
    """Hole den gültigen Steuerparameter für ein gegebenes Jahr.

    Sucht den letzten Eintrag mit Jahreszahl <= year.
    Wirft ValueError wenn kein gültiger Eintrag existiert.
    """
    data = _load_parameters()
    if param_name not in data:
        raise ValueError(f"Unbekannter Parameter: {param_name}")

    param_data = data[param_name]
    # Nur numerische Keys (Jahre), _comment etc. ignorieren
    year_keys = sorted(int(k) for k in param_data if k.isdigit())

    if not year_keys:
        raise ValueError(f"Keine Jahresdaten für Parameter: {param_name}")

    valid_key = None
    for k in year_keys:
        if k <= year:
            valid_key = k
        else:
            break

    if valid_key is None:
        raise ValueError(
            f"Kein gültiger Eintrag für {param_name} im Jahr {year} "
            f"(frühester Eintrag: {year_keys[0]})"
        )

    return param_data[str(valid_key)]


def get_haltefrist_tage(year: int) -> int:
    """Mindesthaltedauer in Tagen für steuerfreie Veräußerung (§ 23 EStG)."""
    return int(get_param("haltefrist_tage", year))


def get_staking_freigrenze(year: int) -> Decimal:
    """Jährliche Freigrenze für Staking-Erträge (§ 22 Nr. 3 EStG)."""
    return Decimal(str(get_param("staking_freigrenze", year)))
