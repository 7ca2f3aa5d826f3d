"""CLI subcommands for phpmatrix."""
