"""
Command-line Layer.

Typer application and Rich rendering helpers.
"""
