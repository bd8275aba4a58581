"""CFX inspection-result tree for PCB manufacturing data."""

__version__ = "0.1.0"
