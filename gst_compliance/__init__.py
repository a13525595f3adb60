"""GST invoicing, liability and filing-compliance service."""

__version__ = "0.1.0"
