"""KryptoTax – FIFO-Steuerrechner für Kryptowährungen."""

__version__ = "0.1.0"
