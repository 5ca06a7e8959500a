# league_standings/store_client.py
"""
Thin HTTP client wrapper for the hosted document store (Firestore REST API).

Documents come back as {"name": ".../documents/<collection>/<id>", "fields": {...}}
where every field value is tagged with its type. This module unwraps those values
into plain Python objects; turning them into domain models is done by documents.py.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests
from dateutil import parser as date_parser

from .errors import DocumentNotFound, StoreError

logger = logging.getLogger(__name__)

PAGE_SIZE = 300


def decode_value(value: Dict[str, Any]) -> Any:
    """Convert one typed store value ({"integerValue": "5"}, ...) to a Python value."""
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return date_parser.isoparse(value["timestampValue"])
    if "referenceValue" in value:
        return value["referenceValue"]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields") or {})
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values") or []]
    return None


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Decode a document's `fields` map."""
    return {k: decode_value(v) for k, v in fields.items()}


def encode_value(value: Any) -> Dict[str, Any]:
    """Convert a plain Python value into a typed store value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    return {"stringValue": str(value)}


def document_id(doc: Dict[str, Any]) -> str:
    """Return the last path segment of a document name."""
    return (doc.get("name") or "").rsplit("/", 1)[-1]


def flatten_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Return {"id": <doc id>, **decoded fields}."""
    out = decode_fields(doc.get("fields") or {})
    out["id"] = document_id(doc)
    return out


class StoreClient:
    """A minimal client for reading and patching documents in the store."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        database: str = "(default)",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Store the documents root URL and build request headers."""
        self.base_url = base_url.rstrip("/")
        self.documents_root = f"/v1/projects/{project_id}/databases/{database}/documents"
        self.timeout = timeout
        self._api_key = api_key
        self._session = session or requests.Session()
        self._headers = {"User-Agent": "league-standings/1.0"}

    def _params(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = dict(extra or {})
        if self._api_key:
            params["key"] = self._api_key
        return params

    def request_json(self, method: str, path: str, **kwargs) -> Any:
        """
        Execute a request to base_url + documents root + path and return parsed JSON.

        Raises:
            DocumentNotFound on a 404.
            StoreError on transport failures, other non-2xx responses or invalid JSON.
        """
        url = f"{self.base_url}{self.documents_root}{path}"
        try:
            r = self._session.request(method, url, timeout=self.timeout, headers=self._headers, **kwargs)
            r.raise_for_status()
            return r.json()
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                raise DocumentNotFound(f"{method} {path}: no such document") from exc
            raise StoreError(f"{method} {path} failed: {exc}") from exc
        except requests.RequestException as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"{method} {path} returned invalid JSON") from exc

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """Fetch every document of a collection, following page tokens."""
        out: List[Dict[str, Any]] = []
        token: Optional[str] = None

        while True:
            extra: Dict[str, Any] = {"pageSize": PAGE_SIZE}
            if token:
                extra["pageToken"] = token
            payload = self.request_json("GET", f"/{collection}", params=self._params(extra))
            out.extend(flatten_document(d) for d in payload.get("documents") or [])
            token = payload.get("nextPageToken")
            if not token:
                break

        logger.debug("loaded %d documents from %s", len(out), collection)
        return out

    def run_query(self, collection: str, field_path: str, value: Any) -> List[Dict[str, Any]]:
        """Fetch documents of a collection whose field equals value."""
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field_path},
                        "op": "EQUAL",
                        "value": encode_value(value),
                    }
                },
            }
        }
        payload = self.request_json("POST", ":runQuery", params=self._params(), json=body)
        rows: Iterable[Dict[str, Any]] = payload if isinstance(payload, list) else []
        # entries without a "document" key only carry a readTime
        return [flatten_document(row["document"]) for row in rows if isinstance(row, dict) and row.get("document")]

    def update_fields(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Patch only the given fields of one existing document.

        With the exists precondition a missing doc_id is answered with a 404
        (DocumentNotFound) instead of creating a new document.
        """
        params = self._params({"updateMask.fieldPaths": list(fields), "currentDocument.exists": "true"})
        body = {"fields": {k: encode_value(v) for k, v in fields.items()}}
        payload = self.request_json("PATCH", f"/{collection}/{doc_id}", params=params, json=body)
        return flatten_document(payload)

    def teams(self) -> List[Dict[str, Any]]:
        """Fetch the team directory."""
        return self.list_documents("teams")

    def games(self) -> List[Dict[str, Any]]:
        """Fetch every game document (scheduled and completed)."""
        return self.list_documents("games")

    def draft_picks(self, draft_class_id: str) -> List[Dict[str, Any]]:
        """Fetch the picks generated for one draft class."""
        return self.run_query("draftPicks", "draftClassId", draft_class_id)

    def set_playoff_status(self, team_id: str, status: Optional[str]) -> Dict[str, Any]:
        """Write (or clear, with None) the playoff status of a team."""
        return self.update_fields("teams", team_id, {"playoffStatus": status})

    def record_draft_pick(self, pick_id: str, player_id: str) -> Dict[str, Any]:
        """Attach the selected player to a draft pick."""
        return self.update_fields("draftPicks", pick_id, {"playerId": player_id, "completed": True})
