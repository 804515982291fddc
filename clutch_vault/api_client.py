"""REST client for the league history, owner alias and rating endpoints."""

import logging
from typing import Any, Optional

import requests

from .config import get_config
from .schemas import LeagueHistory, OwnerAlias, OwnerAliasesResponse, dump_aliases

logger = logging.getLogger('clutch_vault.api_client')


class APIError(Exception):
    """Failed API call; the message is shown to the user verbatim."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClutchAPIClient:
    """Thin JSON client over a requests.Session.

    Errors are never retried: HTTP failures raise APIError with the message
    from the backend's {"error": {"message": ...}} envelope.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if base_url is None or timeout is None:
            config = get_config()
            base_url = base_url or config.api_url
            token = token if token is not None else config.api_token
            timeout = timeout or config.request_timeout
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'ClutchAPIClient':
        """Build a client from get_config() (file + environment)."""
        config = get_config()
        return cls(base_url=config.api_url, token=config.api_token, timeout=config.request_timeout)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'ClutchAPIClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'Cache-Control': 'no-store',
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method: str, endpoint: str, json_body: Any = None) -> Any:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            endpoint: Path below the base URL (e.g. '/leagues/abc')
            json_body: Optional JSON-serializable request body

        Returns:
            Decoded JSON response

        Raises:
            APIError: On transport failure, non-2xx status, or an unreadable body
        """
        url = f'{self.base_url}{endpoint}'
        logger.debug(f'{method} {url}')

        try:
            response = self.session.request(
                method,
                url,
                json=json_body,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f'{method} {endpoint} failed: {e}')
            raise APIError(str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = 'Request failed'
            if isinstance(data, dict) and isinstance(data.get('error'), dict):
                message = data['error'].get('message') or message
            logger.error(f'{method} {endpoint} returned {response.status_code}: {message}')
            raise APIError(message, response.status_code)

        if data is None:
            raise APIError(f'Invalid JSON response from {endpoint}', response.status_code)

        return data

    # League

    def get_league(self, league_id: str) -> dict[str, Any]:
        data = self.request('GET', f'/leagues/{league_id}')
        if isinstance(data, dict) and isinstance(data.get('league'), dict):
            return data['league']
        return data

    # History

    def get_league_history(self, league_id: str) -> LeagueHistory:
        """Fetch imported history grouped by season year."""
        data = self.request('GET', f'/imports/history/{league_id}')
        return LeagueHistory.model_validate(data)

    # Owner aliases

    def get_owner_aliases(self, league_id: str) -> list[OwnerAlias]:
        """Fetch the persisted raw name -> canonical owner aliases."""
        data = self.request('GET', f'/leagues/{league_id}/owner-aliases')
        if isinstance(data, list):
            data = {'aliases': data}
        return OwnerAliasesResponse.model_validate(data).aliases

    def save_owner_aliases(self, league_id: str, aliases: list[OwnerAlias]) -> Any:
        """Replace the league's aliases. Last write wins; there is no version check."""
        logger.info(f'Saving {len(aliases)} owner aliases for league {league_id}')
        return self.request('POST', f'/leagues/{league_id}/owner-aliases', json_body=dump_aliases(aliases))

    # Ratings

    def get_clutch_rating(self, user_id: str) -> Optional[dict[str, Any]]:
        """The user's rating from the {"clutchRating": {...}} envelope, or None if they have none."""
        data = self.request('GET', f'/managers/{user_id}/clutch-rating')
        if not isinstance(data, dict):
            return None
        return data.get('clutchRating') or None
