"""
Lister for JFrog Artifactory repositories.

The whole repository is returned by one deep storage listing::

    GET {base}/artifactory/api/storage/{repo}?list&deep=1&listFolders=0
"""

import logging
from typing import List

from ..api.source_client import SourceClient
from ..models.artifacts import ArtifactRef
from ..models.source_api import JfrogFileList
from ..utils.constants import DEFAULT_PAGE_SIZE, JFROG_STORAGE_PATH
from ..utils.url import split_jfrog_url
from .base import BaseLister


class JfrogLister(BaseLister):
    """Lists a JFrog repository with a single deep storage listing."""

    kind = "jfrog"

    def __init__(self, client: SourceClient, src: str, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(client, src, page_size)
        self.base_url, self.repository = split_jfrog_url(src)

    @property
    def repository_root(self) -> str:
        return f"{self.base_url}/artifactory/{self.repository}"

    def list_artifacts(self) -> List[ArtifactRef]:
        url = f"{self.base_url}{JFROG_STORAGE_PATH}/{self.repository}"
        # The storage API takes bare flags, so they are written into the URL
        with self._listing_errors():
            listing = JfrogFileList.model_validate(self.client.get_json(f"{url}?list&deep=1&listFolders=0"))
            refs = [
                ArtifactRef(source_path=entry.uri, display_name=entry.name)
                for entry in listing.files
                if not entry.folder
            ]

        logging.info("Listed %d artifacts from JFrog repository %s", len(refs), self.repository)
        return refs


__all__ = ["JfrogLister"]
