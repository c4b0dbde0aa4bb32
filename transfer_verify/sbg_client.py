"""
Minimal Seven Bridges platform client for the source side.

Only the calls needed for verification are implemented: project lookup,
folder resolution, recursive file listing and bulk file details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import requests

import config as config_module

from .credentials import SbgCredentials
from .errors import MalformedResponseError, SbgApiError

FOLDER_TYPE = "folder"
_LIST_FIELDS = "id,name,type"  # sizes come from bulk details
_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


@dataclass
class SbgProject:
    """A resolved project; `id` is the `division/project` identifier."""

    id: str
    name: str
    href: Optional[str] = None


@dataclass
class SbgFile:
    """A file or folder in a project, with its path from the project root."""

    id: str
    name: str
    type: str
    path: str
    size: Optional[int] = None

    @property
    def is_folder(self) -> bool:
        """Return True for folder entries."""
        return self.type == FOLDER_TYPE


def _next_link(result: dict) -> Optional[dict]:
    for link in result.get("links") or []:
        if link.get("rel") == "next":
            return link
    return None


def _join_path(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


def _file_from_item(item: dict, parent_path: str) -> SbgFile:
    size = item.get("size")
    return SbgFile(
        id=item["id"],
        name=item["name"],
        type=item.get("type", "file"),
        path=_join_path(parent_path, item["name"]),
        size=int(size) if size is not None else None,
    )


def _index_bulk_items(items) -> Optional[Dict[str, dict]]:
    details = {}
    for item in items or []:
        if "error" in item:
            logging.error("Bulk file details error: %s", item["error"])
            return None
        resource = item.get("resource") or {}
        if "id" in resource:
            details[resource["id"]] = resource
    return details


class SbgDivision:
    """Authenticated access to one Seven Bridges division."""

    def __init__(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        division: str,
        credentials: SbgCredentials,
        api_url: str = config_module.SBG_API_URL,
        timeout: float = config_module.SBG_REQUEST_TIMEOUT,
        bulk_batch_size: int = config_module.SBG_BULK_BATCH_SIZE,
        session: Optional[requests.Session] = None,
    ):
        self.division = division
        self.api_url = (credentials.api_endpoint or api_url).rstrip("/")
        self.timeout = timeout
        self.bulk_batch_size = bulk_batch_size
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "X-SBG-Auth-Token": credentials.auth_token,
            }
        )

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        return f"{self.api_url}/{path_or_url.lstrip('/')}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logging.debug("Executing %s to %s", method, url)
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise SbgApiError(method, url, None, str(exc)) from exc

    @staticmethod
    def _decode(method: str, url: str, response: requests.Response):
        try:
            return response.json()
        except ValueError as exc:
            raise SbgApiError(method, url, response.status_code, "response is not JSON") from exc

    def _drain_pages(self, result: dict) -> List[dict]:
        items = list(result["items"])
        next_link = _next_link(result)
        while next_link:
            next_method = next_link.get("method", "GET")
            next_url = self._url(next_link["href"])
            page = self._request(next_method, next_url)
            if not page.ok:
                raise SbgApiError(next_method, next_url, page.status_code, page.text or page.reason)
            page_result = self._decode(next_method, next_url, page)
            items.extend(page_result.get("items", []))
            next_link = _next_link(page_result)
        return items

    def execute(
        self,
        method: str,
        path_or_url: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[dict] = None,
    ):
        """
        Send one API request, following `next` links for list responses.

        Returns:
            list of items for list endpoints, the decoded object otherwise,
            or None when a GET returns 404.

        Raises:
            SbgApiError: On transport failures or unexpected status codes
            MalformedResponseError: When list pages or their links have the wrong shape
        """
        url = self._url(path_or_url)
        response = self._request(method, url, params=params, json=payload)
        if method == "GET" and response.status_code == 404:
            return None
        if not response.ok:
            raise SbgApiError(method, url, response.status_code, response.text or response.reason)
        result = self._decode(method, url, response)
        if not isinstance(result, dict) or "items" not in result:
            return result
        try:
            return self._drain_pages(result)
        except _MALFORMED as exc:
            raise MalformedResponseError(method, url, repr(exc)) from exc

    def get_project(self, project: str) -> Optional[SbgProject]:
        """Look up a project by its short name within this division."""
        path = f"projects/{self.division}/{project}"
        result = self.execute("GET", path)
        if not result:
            return None
        try:
            return SbgProject(id=result["id"], name=result.get("name", project), href=result.get("href"))
        except _MALFORMED as exc:
            raise MalformedResponseError("GET", self._url(path), repr(exc)) from exc

    def _list_files(self, project: SbgProject, parent: Optional[SbgFile], **extra) -> List[SbgFile]:
        params = {"fields": _LIST_FIELDS, "limit": str(config_module.SBG_PAGE_LIMIT)}
        if parent is None:
            params["project"] = project.id
        else:
            params["parent"] = parent.id
        params.update(extra)
        items = self.execute("GET", "files", params=params) or []
        parent_path = parent.path if parent is not None else ""
        try:
            return [_file_from_item(item, parent_path) for item in items]
        except _MALFORMED as exc:
            raise MalformedResponseError("GET", self._url("files"), f"file item {exc!r}") from exc

    def list_children(self, project: SbgProject, parent: Optional[SbgFile] = None) -> List[SbgFile]:
        """List the direct children of a folder, or of the project root."""
        return self._list_files(project, parent)

    def get_file_by_name(self, project: SbgProject, path: str) -> Optional[SbgFile]:
        """Resolve a `/`-separated path from the project root to a file or folder."""
        current: Optional[SbgFile] = None
        for segment in [part for part in path.split("/") if part]:
            matches = [f for f in self._list_files(project, current, name=segment) if f.name == segment]
            if not matches:
                return None
            current = matches[0]
        return current

    def recursive_list(self, project: SbgProject, folder: Optional[SbgFile] = None) -> List[SbgFile]:
        """
        List every file and folder beneath a folder (or the project root).

        Entries are returned depth-first in listing order; folder entries are
        included so callers can see the tree shape.
        """
        collected: List[SbgFile] = []
        for child in self.list_children(project, folder):
            collected.append(child)
            if child.is_folder:
                collected.extend(self.recursive_list(project, child))
        return collected

    def bulk_get_file_details(self, files: Iterable[SbgFile]) -> bool:
        """
        Populate `size` on every file with bulk detail requests.

        Returns:
            True when every file received its details, False otherwise.
        """
        pending = [f for f in files if not f.is_folder]
        for start in range(0, len(pending), self.bulk_batch_size):
            batch = pending[start : start + self.bulk_batch_size]
            try:
                items = self.execute("POST", "bulk/files/get", payload={"file_ids": [f.id for f in batch]})
                details = _index_bulk_items(items)
            except (SbgApiError, MalformedResponseError) as exc:
                logging.error("Bulk file details request failed: %s", exc)
                return False
            except _MALFORMED as exc:
                logging.error("Malformed bulk file details response: %r", exc)
                return False
            if details is None:
                return False
            for sb_file in batch:
                resource = details.get(sb_file.id)
                if resource is None or resource.get("size") is None:
                    logging.error("No size returned for SB file %s", sb_file.path)
                    return False
                try:
                    sb_file.size = int(resource["size"])
                except (TypeError, ValueError):
                    logging.error("Invalid size %r returned for SB file %s", resource["size"], sb_file.path)
                    return False
        return True


__all__ = ["FOLDER_TYPE", "SbgDivision", "SbgFile", "SbgProject"]
