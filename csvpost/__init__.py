"""csvpost: upload pharmacy shipment CSV files to the pharmacy POS API."""

__version__ = "1.0.0"

__all__ = ["__version__"]
