"""Search app wiring: config, logging and the app entry point."""
