"""Lambdaforge CLI — Typer-based command-line interface.

Provides the ``lambdaforge`` command with subcommands to create and update
a Lambda function from its spec, point a stage alias at a version, and
show the deployment history.

All output uses Rich for formatted terminal display.
"""
