"""Keep a README's recent GitHub activity section up to date."""

__version__ = '0.3.0'
