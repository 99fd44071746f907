"""Pet Board: an in-memory pet list driven by HTMX partial updates."""
