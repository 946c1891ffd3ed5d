"""
Packaged resource lookup.

Resources are files shipped inside a Python package (e.g. HTML mail
templates) and are found by a fragment of their file name.
"""

from importlib import resources

from apps.core.cache import ResourceCache
from apps.core.logging import get_logger
from apps.problems.exceptions import DataNotFoundError

logger = get_logger(__name__)


class ResourceLoader:
    """
    Loads text resources from ``package`` by partial file name.

    Args:
        package: Dotted name of the package holding the files.
        cache: Memo shared by the loaders of one composition root.
    """

    def __init__(self, package: str, cache: ResourceCache | None = None) -> None:
        self.package = package
        self.cache = cache if cache is not None else ResourceCache()

    def resolve(self, partial_name: str) -> str:
        """
        Return the first file name (alphabetically) containing ``partial_name``.

        Raises:
            DataNotFoundError: No file matches
        """
        names = sorted(
            entry.name for entry in resources.files(self.package).iterdir() if entry.is_file()
        )
        for name in names:
            if partial_name in name:
                return name
        raise DataNotFoundError(f"Resource {partial_name} was not found.")

    def load_text(self, partial_name: str) -> str:
        """Read a resource as UTF-8 text, caching it under its partial name."""
        key = f"{self.package}:{partial_name}"
        return self.cache.get_or_load(key, lambda: self._read(partial_name))

    def _read(self, partial_name: str) -> str:
        name = self.resolve(partial_name)
        logger.debug("resource_loaded", package=self.package, resource=name)
        return resources.files(self.package).joinpath(name).read_text(encoding="utf-8")
