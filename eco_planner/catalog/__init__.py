"""Static seed data: the phased-plan action catalog and the quick-action list."""
