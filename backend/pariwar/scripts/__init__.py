"""Command-line maintenance helpers (``python -m pariwar.scripts.<name>``)."""
