"""cli.commands

One module per CLI command. Each exposes a ``run_*`` function returning an
exit code.
"""
