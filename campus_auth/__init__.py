"""Authentication subsystem for the campus learning portal."""
