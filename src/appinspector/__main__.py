"""Allow ``python -m appinspector``."""

from appinspector.cli.main import cli

if __name__ == "__main__":
    cli()
