"""Week-by-week terminal view of scheduled Zesty meal deliveries."""

__version__ = "0.1.0"
