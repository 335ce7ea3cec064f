"""CLI subcommands for depspec."""
