"""dynamit: interactive terminal explorer for DynamoDB."""

__version__ = "0.1.0"
