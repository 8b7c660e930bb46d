"""Users module: accounts and identity lookups."""
