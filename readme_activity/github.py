import logging

import requests

from readme_activity.events import Event
from readme_activity.exceptions import FetchError

logger = logging.getLogger(__name__)

API_URL = 'https://api.github.com'


class GitHubEvents:
    """Pages through a user's public events."""

    def __init__(self, username, token=None, session=None, timeout=30):
        self.username = username
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/vnd.github+json'})
        if token:
            self.session.headers['Authorization'] = f'token {token}'

    def fetch_page(self, page, per_page=100):
        url = f'{API_URL}/users/{self.username}/events/public'
        params = {'per_page': per_page, 'page': page}
        logger.debug('GET %s page=%d per_page=%d', url, page, per_page)
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            items = r.json()
        except (requests.RequestException, ValueError) as exc:
            raise FetchError(f'Could not fetch page {page} of events for {self.username}: {exc}') from exc

        if not isinstance(items, list):
            raise FetchError(f'Unexpected response for page {page}: {items!r}')
        return [Event.from_api(item) for item in items if isinstance(item, dict)]
