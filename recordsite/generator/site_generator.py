"""High-level orchestration for static site generation.

This module coordinates fetching item records, assigning slugs, planning item,
listing, and taxonomy pages, rendering them with the theme templates, and
handing the results to a page writer. It exposes :class:`SiteGenerator`,
which consumes a :class:`~recordsite.config.SiteConfig`.

Slugs for taxonomies, items, and terms are all assigned single-threaded
before any page is rendered. Rendering and writing may then run on a thread
pool because pages share no mutable state.

Example
-------
>>> from pathlib import Path
>>> from recordsite.config import load_site_config
>>> from recordsite.generator import SiteGenerator
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> report = SiteGenerator(config).run()  # doctest: +SKIP
>>> report.written[0]  # doctest: +SKIP
PosixPath('public/space-harrier.html')
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor

from recordsite._constants import ITEM_LABEL_FIELDS, REQUIRED_TEMPLATES
from recordsite.paths import PathResolver, Route
from recordsite.slugs import SlugRegistry
from recordsite.sources import DataSourceClient
from recordsite.storage import FileSystemWriter
from recordsite.theme import load_theme

from .models import GenerationReport, Page, PageFailure
from .pagination import count_pages, plan_pages
from .renderer import TemplateRenderer
from .taxonomy import TaxonomyIndexer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from recordsite.config import SiteConfig
    from recordsite.storage import PageWriter
    from recordsite.theme import Theme

logger = logging.getLogger(__name__)


class SiteGenerator:
    """Turn item records into a rendered static site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        theme: Theme | None = None,
        client: DataSourceClient | None = None,
        writer: PageWriter | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator, loading and validating the theme.

        Parameters
        ----------
        config : SiteConfig
            Validated site configuration.
        theme : Theme, optional
            Preloaded theme; defaults to loading ``config.theme_dir``.
        client : DataSourceClient, optional
            Client used by :meth:`run` to fetch records.
        writer : PageWriter, optional
            Destination for rendered pages; defaults to a filesystem writer.
        output_dir : Path, optional
            Override for the output directory of the default writer.

        Raises
        ------
        ThemeError
            If the theme is missing a required template.
        """
        self.config = config
        self.theme = theme or load_theme(config.theme_dir)
        for role in REQUIRED_TEMPLATES:
            self.theme.require(role)
        self.paths = PathResolver(
            config.url_style,
            filename_pattern=config.filename_pattern,
            base_url=config.site.base_url,
        )
        self.renderer = TemplateRenderer()
        self.client = client
        self.writer = writer or FileSystemWriter(output_dir or config.output_dir)
        self.taxonomies = list(config.taxonomies)
        if self.taxonomies and not self.theme.supports_taxonomies:
            logger.warning(
                "Theme %r lacks taxonomy/terms templates; skipping taxonomies %s",
                self.theme.name,
                ", ".join(self.taxonomies),
            )
            self.taxonomies = []
        self.indexer = TaxonomyIndexer(
            self.paths,
            items_per_page=config.items_per_page,
            dedupe=config.dedupe_term_items,
            emit_empty=config.emit_empty_listings,
        )

    def run(self) -> GenerationReport:
        """Fetch every configured data source and build the site from it.

        Returns
        -------
        GenerationReport
            Written paths and per-page failures.

        Raises
        ------
        DataSourceError
            If a data source cannot be fetched; nothing is written then.
        """
        client = self.client or DataSourceClient(timeout=self.config.request_timeout)
        try:
            records = client.fetch_all(self.config.data_sources)
        finally:
            if self.client is None:
                client.close()
        return self.build(records)

    def build(self, records: cabc.Sequence[typ.Any]) -> GenerationReport:
        """Plan, render, and write every page for ``records``."""
        report = GenerationReport()
        pages = self.plan(records, report)
        self._emit_all(pages, report)
        logger.info(
            "Generated %d pages with %d failures", len(report.written), len(report.failures)
        )
        return report

    def plan(
        self,
        records: cabc.Sequence[typ.Any],
        report: GenerationReport | None = None,
    ) -> list[Page]:
        """Assign slugs and plan every page for ``records``.

        Records that are not mappings are skipped and, when ``report`` is
        given, recorded as failures.
        """
        reserved = ["index"]
        listing_pages = count_pages(len(records), self.config.items_per_page)
        reserved.extend(
            self.paths.leaf_name(Route(page=number))
            for number in range(2, listing_pages + 1)
        )
        taxonomy_registry = SlugRegistry(reserved)
        taxonomy_slugs = {name: taxonomy_registry.assign(name) for name in self.taxonomies}
        items = self._prepare_items(
            records, SlugRegistry([*reserved, *taxonomy_slugs.values()]), report
        )

        shared = {
            "site": self.config.site.as_context(),
            "taxonomies": [
                {"name": name, "slug": slug, "url": self.paths.url(Route((slug,)))}
                for name, slug in taxonomy_slugs.items()
            ],
        }
        pages = [self._single_page(item, shared) for item in items]
        pages.extend(
            plan_pages(
                items,
                self.config.items_per_page,
                Route(),
                self.paths,
                template="list",
                context=shared,
                emit_empty=self.config.emit_empty_listings,
            )
        )
        if self.taxonomies:
            index = self.indexer.index(items, self.taxonomies)
            pages.extend(self.indexer.plan(index, taxonomy_slugs, context=shared))
        return pages

    def render_page(self, page: Page) -> str:
        """Render ``page`` with its template and wrap it in the base template."""
        context = dict(page.context)
        pagination_template = self.theme.get("pagination")
        if "pagination" in context:
            nav = ""
            if pagination_template is not None:
                nav = self.renderer.render(pagination_template, context)
            context["pagination"] = {**context["pagination"], "html": nav}
        body = self.renderer.render(self.theme.require(page.template), context)
        return self.renderer.render(
            self.theme.require("base"), {**context, "content": body}
        )

    def _prepare_items(
        self,
        records: cabc.Sequence[typ.Any],
        registry: SlugRegistry,
        report: GenerationReport | None,
    ) -> list[dict[str, typ.Any]]:
        """Return output contexts for every usable record, in record order."""
        items: list[dict[str, typ.Any]] = []
        for position, record in enumerate(records):
            if not isinstance(record, cabc.Mapping):
                reason = f"record is a {type(record).__name__}, not a mapping"
                logger.warning("Skipping record %d: %s", position, reason)
                if report is not None:
                    report.failures.append(PageFailure(f"record {position}", reason))
                continue
            label = _item_label(record)
            if label is None:
                logger.warning(
                    "Record %d has none of %s; using a fallback slug",
                    position,
                    ", ".join(ITEM_LABEL_FIELDS),
                )
            slug = registry.assign(label)
            items.append({**record, "slug": slug, "url": self.paths.url(Route((slug,)))})
        return items

    def _single_page(
        self, item: dict[str, typ.Any], shared: cabc.Mapping[str, typ.Any]
    ) -> Page:
        route = Route((item["slug"],))
        return Page(
            template="single",
            context={**item, **shared, "item": item},
            route=route,
            output_path=self.paths.path(route),
        )

    def _emit_all(self, pages: list[Page], report: GenerationReport) -> None:
        """Render and write ``pages``, collecting results in page order."""
        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                outcomes = list(executor.map(self._emit, pages))
        else:
            outcomes = [self._emit(page) for page in pages]
        for outcome in outcomes:
            if isinstance(outcome, PageFailure):
                report.failures.append(outcome)
            else:
                report.written.append(outcome)

    def _emit(self, page: Page) -> Path | PageFailure:
        html = self.render_page(page)
        try:
            path = self.writer.write(page.output_path, html)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to write %s: %s", page.output_path, exc)
            return PageFailure(page.output_path, str(exc))
        logger.debug("Wrote %s", path)
        return path


def _item_label(record: cabc.Mapping[str, typ.Any]) -> str | None:
    """Return the first usable label among the record's identifying fields."""
    for field in ITEM_LABEL_FIELDS:
        value = record.get(field)
        if isinstance(value, bool) or value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


__all__ = ["SiteGenerator"]
