"""DyeProfile command-line interface."""
