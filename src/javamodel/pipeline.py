"""Orchestrator: settings, registry, resolvers, then sources."""

from __future__ import annotations

import logging
from pathlib import Path

from javamodel.config import Settings, load_settings
from javamodel.registry import Registry
from javamodel.resolvers import CatalogResolver, JavapResolver

logger = logging.getLogger(__name__)


def attach_default_resolvers(
    registry: Registry, settings: Settings, project_dir: Path | None = None
) -> None:
    """Add the resolvers *settings* asks for, e.g. after :meth:`Registry.load`."""
    if settings.jdk_catalog:
        registry.add_resolver(CatalogResolver.jdk())
    if settings.javap or settings.classpath:
        base = project_dir or Path.cwd()
        registry.add_resolver(JavapResolver([base / p for p in settings.classpath]))


def build_registry(project_dir: Path, settings: Settings | None = None) -> Registry:
    """Parse every configured source directory of *project_dir* into a registry."""
    project_dir = project_dir.resolve()
    settings = settings or load_settings(project_dir)

    registry = Registry(parser=settings.parser)
    attach_default_resolvers(registry, settings, project_dir)
    logger.debug("Resolvers: %s", [type(r).__name__ for r in registry.resolvers])

    for source_dir in settings.source_dirs:
        root = project_dir / source_dir
        if not root.is_dir():
            logger.warning("Source directory %s not found — skipping", root)
            continue
        registry.add_source_tree(
            root, skip_errors=settings.skip_errors, encoding=settings.encoding
        )

    logger.debug(
        "Project %s: %d sources, %d classes",
        project_dir.name,
        len(registry.get_sources()),
        len(registry.get_classes()),
    )
    return registry
