"""Infrastructure adapters: database, HTTP sources, settings and wiring."""
