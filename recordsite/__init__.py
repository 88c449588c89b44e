"""Render static HTML sites from flat collections of content records.

This package exposes the CLI entry points used by the ``recordsite`` console
script to fetch record data, assign slugs, plan listing and taxonomy pages,
and write the rendered site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from recordsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
