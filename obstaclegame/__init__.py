"""Rule engine and harness for a samegame-style puzzle with obstacle blocks."""
