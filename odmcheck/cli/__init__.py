"""odmcheck CLI: Typer-based command-line interface.

Provides the ``odmcheck`` command: ``check`` for the boot service,
``show`` and ``snapshot`` for bring-up and factory use.

Terminal output uses Rich.
"""
