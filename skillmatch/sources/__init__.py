from pathlib import Path

from .base import JobCatalogBase, job_listing_from_dict
from .file import FileCatalog
from .sample import SampleCatalog

from skillmatch.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobCatalogBase", "FileCatalog", "SampleCatalog",
    "job_listing_from_dict", "get_catalog",
]


def get_catalog(settings: dict, env_getter) -> JobCatalogBase:
    path_str = env_getter("SKILLMATCH_CATALOG_PATH") or settings.get("catalog_path") or ""
    if path_str:
        path = Path(path_str).expanduser()
        if path.exists():
            log.info("Using catalog file: %s", path)
            return FileCatalog(path)
        log.warning("Catalog file %s not found, falling back to samples", path)

    log.info("No catalog configured, using SampleCatalog")
    return SampleCatalog()
