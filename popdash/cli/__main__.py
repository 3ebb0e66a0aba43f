"""Module entry point for `python -m popdash.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from popdash.cli import cli

    cli()
