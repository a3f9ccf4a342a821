"""cli

Argument builders and command implementations for :mod:`ci_analyzer_cli`.
"""
