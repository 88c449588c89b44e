"""Load and validate site configuration YAML for recordsite builds.

This subpackage parses the project's ``site.yaml`` file, applies defaults,
validates the pagination, URL style, and taxonomy settings, and produces the
:class:`SiteConfig` dataclass that the generator consumes. The primary entry
point is :func:`load_site_config`, which refuses invalid configuration before
any page work starts.

Examples
--------
>>> from pathlib import Path
>>> from recordsite.config import load_site_config
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> config.url_style  # doctest: +SKIP
'clean'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, SiteMetadata

__all__ = ["SiteConfig", "SiteConfigError", "SiteMetadata", "load_site_config"]
