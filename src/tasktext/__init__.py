"""Convert markdown task lines to structured task records and back."""

__version__ = "0.1.0"
