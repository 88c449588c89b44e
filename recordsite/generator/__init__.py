"""Slug, pagination, taxonomy, and template machinery for site generation."""

from .models import GenerationReport, Page, PageFailure, PageLink, Pagination, Term
from .pagination import count_pages, plan_pages
from .renderer import Template, TemplateRenderer, render
from .site_generator import SiteGenerator
from .taxonomy import TaxonomyIndexer, index_taxonomies

__all__ = [
    "GenerationReport",
    "Page",
    "PageFailure",
    "PageLink",
    "Pagination",
    "SiteGenerator",
    "TaxonomyIndexer",
    "Template",
    "TemplateRenderer",
    "Term",
    "count_pages",
    "index_taxonomies",
    "plan_pages",
    "render",
]
