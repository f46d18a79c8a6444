"""
Sanity content lake client.
Runs GROQ queries and commits patch/delete mutations over the HTTP API.
"""

import json
import requests
import logging
from typing import List, Dict, Optional, Any

from ..core.config import StoreSettings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A request to the content store failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_description(response: requests.Response) -> str:
    """Pull the human readable description out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return f"{response.status_code} {response.reason}".strip()

    if isinstance(body, dict):
        error = body.get('error')
        if isinstance(error, dict):
            return error.get('description') or error.get('message') or str(error)
        if isinstance(error, str):
            return body.get('message') or error
        if body.get('message'):
            return body['message']
    return f"{response.status_code} {response.reason}".strip()


class Patch:
    """
    Pending patch on a single document.

    Example:
        client.patch(order_id).set({'status': 'dispatch'}).commit()
    """

    def __init__(self, client: 'SanityClient', document_id: str):
        self.client = client
        self.document_id = document_id
        self.operations: Dict[str, Any] = {}

    def set(self, attributes: Dict[str, Any]) -> 'Patch':
        self.operations.setdefault('set', {}).update(attributes)
        return self

    def serialize(self) -> Dict[str, Any]:
        return {'patch': {'id': self.document_id, **self.operations}}

    def commit(self) -> Dict[str, Any]:
        """Send the patch as a single atomic transaction."""
        return self.client.mutate([self.serialize()])


class SanityClient:
    """Client for the Sanity HTTP API."""

    def __init__(self, settings: StoreSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers['Authorization'] = f"Bearer {settings.token}"

    @property
    def api_host(self) -> str:
        # Authenticated reads always go to the live API, never the CDN
        return f"https://{self.settings.project_id}.api.sanity.io"

    def _url(self, endpoint: str) -> str:
        version = self.settings.api_version.lstrip('v')
        return f"{self.api_host}/v{version}/data/{endpoint}/{self.settings.dataset}"

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make a request to the data API and return the decoded body."""
        url = self._url(endpoint)
        try:
            response = self.session.request(method, url, timeout=self.settings.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Sanity API error: {e}")
            raise StoreError(str(e)) from e

        if not response.ok:
            description = _error_description(response)
            logger.error(f"Sanity API error ({response.status_code}): {description}")
            raise StoreError(description, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Sanity API returned a non-JSON body from {endpoint}")
            raise StoreError(f"Invalid response from content store: {e}") from e

    def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a GROQ query.

        Args:
            query: GROQ query string
            params: Query parameters, referenced as $name in the query

        Returns:
            The `result` member of the response
        """
        request_params = {'query': query}
        for name, value in (params or {}).items():
            # GROQ parameters are passed JSON encoded, strings included
            request_params[f"${name}"] = json.dumps(value)

        logger.debug(f"Running query against {self.settings.dataset}")
        body = self._request('GET', 'query', params=request_params)
        if not isinstance(body, dict) or 'result' not in body:
            raise StoreError("Invalid response from content store: missing result")
        return body['result']

    def mutate(self, mutations: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Commit a list of mutations in one transaction."""
        return self._request(
            'POST',
            'mutate',
            params={'returnIds': 'true', 'visibility': 'sync'},
            json={'mutations': mutations},
        )

    def patch(self, document_id: str) -> Patch:
        """Start a patch on `document_id`."""
        return Patch(self, document_id)

    def delete(self, document_id: str) -> Dict[str, Any]:
        """Delete a document by id."""
        logger.info(f"Deleting document {document_id}")
        return self.mutate([{'delete': {'id': document_id}}])
