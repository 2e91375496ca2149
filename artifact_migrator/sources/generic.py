"""
Lister for generic HTTP file hosts.

The host serves a JSON listing of the repository in numbered pages::

    GET {src}?pageNumber=1&pageSize=1000
    {"items": [{"path": "libs/a.jar", "name": "a.jar", "version": "1.0"}], "totalCount": 2500}

Pages are requested until ``pageNumber * pageSize`` exceeds ``totalCount``
or an empty page comes back.
"""

import logging
from typing import List

from ..models.artifacts import ArtifactRef
from ..models.source_api import GenericListingItem, GenericListingPage
from .base import BaseLister


def _to_ref(item: GenericListingItem) -> ArtifactRef:
    path = item.path.lstrip("/")
    return ArtifactRef(
        source_path=path,
        display_name=item.name or path.rsplit("/", 1)[-1],
        version=item.version,
        package_key=f"{path}:{item.version}" if item.version else None,
    )


class GenericLister(BaseLister):
    """Lists a generic repository through its numbered JSON listing."""

    kind = "generic"

    def list_artifacts(self) -> List[ArtifactRef]:
        refs: List[ArtifactRef] = []
        page_number = 1
        with self._listing_errors():
            while True:
                params = {"pageNumber": page_number, "pageSize": self.page_size}
                page = GenericListingPage.model_validate(self.client.get_json(self.src, params=params))
                refs.extend(_to_ref(item) for item in page.items)
                logging.debug(
                    "Generic page %d: %d items (total %d)", page_number, len(page.items), page.total_count
                )
                if not page.items or page_number * self.page_size > page.total_count:
                    break
                page_number += 1

        logging.info("Listed %d artifacts from %s", len(refs), self.src)
        return refs


__all__ = ["GenericLister"]
