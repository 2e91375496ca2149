"""
Lister for Nexus repositories.

Assets are enumerated with the search API, which pages with an opaque
continuation token::

    GET {base}/service/rest/v1/search/assets?repository={repo}[&continuationToken=...]
"""

import logging
from typing import Dict, List, Optional

from ..api.source_client import SourceClient
from ..models.artifacts import ArtifactRef
from ..models.source_api import NexusAsset, NexusAssetPage
from ..utils.constants import DEFAULT_PAGE_SIZE, NEXUS_ASSETS_PATH
from ..utils.url import split_nexus_url
from .base import BaseLister


def _version(asset: NexusAsset) -> Optional[str]:
    maven = asset.maven2
    if maven is None or not maven.version:
        return None
    return maven.version


class NexusLister(BaseLister):
    """Lists a Nexus repository through the asset search API."""

    kind = "nexus"

    def __init__(self, client: SourceClient, src: str, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(client, src, page_size)
        self.base_url, self.repository = split_nexus_url(src)

    @property
    def repository_root(self) -> str:
        return f"{self.base_url}/repository/{self.repository}"

    def list_artifacts(self) -> List[ArtifactRef]:
        refs: List[ArtifactRef] = []
        url = self.base_url + NEXUS_ASSETS_PATH
        token = ""
        pages = 0
        with self._listing_errors():
            while True:
                params: Dict[str, str] = {"repository": self.repository}
                if token:
                    params["continuationToken"] = token
                page = NexusAssetPage.model_validate(self.client.get_json(url, params=params))
                pages += 1
                for asset in page.items:
                    path = asset.path.lstrip("/")
                    version = _version(asset)
                    refs.append(
                        ArtifactRef(
                            source_path=path,
                            display_name=path.rsplit("/", 1)[-1],
                            version=version,
                            package_key=f"{path}:{version}" if version else None,
                        )
                    )
                token = page.continuation_token or ""
                if not page.items or not token:
                    break

        logging.info("Listed %d artifacts from Nexus repository %s (%d pages)", len(refs), self.repository, pages)
        return refs


__all__ = ["NexusLister"]
