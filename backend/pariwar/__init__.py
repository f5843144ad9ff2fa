"""Top-level application package for the PariwarOS household bill tracker.

This package contains the FastAPI backend: the relational schema for
families, users, documents, billers and bills, the store that
auto-migrates it, and the HTTP routes serving the health check and the
bills listing.

To run the API locally you can execute:

```bash
python -m pariwar
```

This serves the application on http://localhost:8080 (override with
``PORT``).  Without ``DATABASE_URL`` the server runs in demo mode with
mocked bills.  You can override configuration values using environment
variables or a ``.env`` file at the project root.
"""

__all__: list[str] = []
