"""Allow ``python -m ortelius_cli``."""

from ortelius_cli.cli.app import main

main()
