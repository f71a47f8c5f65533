"""Services built on top of the rules engine."""
