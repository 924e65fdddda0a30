"""Pure domain types and delta rules for the voting engine."""
