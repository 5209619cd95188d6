"""mapvalidator: rule-based validation of lanelet maps."""

__version__ = "0.1.0"
