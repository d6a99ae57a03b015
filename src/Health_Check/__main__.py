"""Allow ``python -m Health_Check`` as an alias for the ``health-check`` script."""

from Health_Check.cli import app

app(prog_name="health-check")
