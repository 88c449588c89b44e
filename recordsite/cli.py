"""Cyclopts CLI entrypoint for generating recordsite static sites.

The ``recordsite`` console script defined here fetches item records from the
configured data sources and renders item, listing, and taxonomy pages with the
selected theme. ``recordsite check`` validates the configuration and theme
without fetching anything, which is useful in CI before a deploy.

Examples
--------
Generate the site described by the default configuration:

>>> from recordsite.cli import main
>>> main()  # doctest: +SKIP

Render into a custom directory:

>>> from recordsite.cli import app
>>> app(["generate", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .generator import SiteGenerator
from .logging_utils import setup_logging
from .theme import load_theme

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="recordsite", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Generate the static site from the configured data sources.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug details", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate every page for the requested site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.
    verbose : bool, optional
        Emit debug logging, including every page write.

    Returns
    -------
    None
        Writes rendered pages and prints the generated paths. Exits with
        status 1 when any record or page failed.
    """
    setup_logging(verbose=verbose)
    site_config = load_site_config(config)
    generator = SiteGenerator(site_config, output_dir=output_dir)
    report = generator.run()
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    for failure in report.failures:
        print(f"failed {failure.label}: {failure.reason}", file=sys.stderr)
    if not report.ok:
        sys.exit(1)


@app.command(help="Validate the site config and theme without fetching data.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Load the configuration and theme, reporting what would be generated.

    Raises
    ------
    SiteConfigError
        If the configuration is invalid.
    ThemeError
        If the theme lacks a required template.
    """
    setup_logging()
    site_config = load_site_config(config)
    theme = load_theme(site_config.theme_dir)
    print(f"theme {theme.name}: {', '.join(sorted(theme.templates))}")
    print(f"data sources: {len(site_config.data_sources)}")
    if site_config.taxonomies and not theme.supports_taxonomies:
        print("taxonomies: skipped (theme has no taxonomy/terms templates)")
    elif site_config.taxonomies:
        print(f"taxonomies: {', '.join(site_config.taxonomies)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``recordsite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
