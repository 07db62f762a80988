"""Ridelog: income tracking for rideshare drivers."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI pulls in storage and services; only load it when asked for
    if name == "main":
        from ridelog.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
