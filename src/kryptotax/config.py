"""App-Konfiguration."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class AppConfig:
    """Globale Anwendungskonfiguration.

    ``None`` bedeutet: Wert aus tax_parameters.json für das jeweilige Jahr.
    """

    haltefrist_tage: Optional[int] = None
    staking_freigrenze: Optional[Decimal] = None
