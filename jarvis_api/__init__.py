"""Backend for the J.A.R.V.I.S product showcase site."""

__version__ = "1.0.0"
