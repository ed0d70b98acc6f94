import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from . import config
from .errors import DataUnavailable, ParseError
from .models import TimelineQuery
from .timeline.collector import parse_window
from .timeline.formatters import parse_iso_datetime

logger = logging.getLogger(__name__)


PLAYER_TRAINING_CYCLE_QUERY = """
query GetPlayerTrainingSessions($playerId: uuid!, $startDate: date!, $endDate: date!) {
  training_sessions(
    where: {
      date: { _gte: $startDate, _lte: $endDate }
      attendance: { player_id: { _eq: $playerId } }
    }
    order_by: { date: asc }
  ) {
    id
    date
    type
    intensity
    duration
    attendance(where: { player_id: { _eq: $playerId } }) {
      attended
    }
  }
  matches(
    where: {
      date: { _gte: $startDate, _lte: $endDate }
      player_statistics: { player_id: { _eq: $playerId } }
    }
    order_by: { date: asc }
  ) {
    id
    date
    home_team
    away_team
  }
}
"""


class TrainingDataSource:
    """Supplies matches and training sessions for a player and window"""
    name = "base"

    def fetch_training_cycle(self, query: TimelineQuery) -> Dict[str, Any]:
        """
        Return {"matches": [...], "training_sessions": [...]} for the query.

        Raises:
            DataUnavailable: If the data cannot be fetched
        """
        raise NotImplementedError


def _check_payload(payload: Any, source: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DataUnavailable(f"{source} returned {type(payload).__name__}, expected an object", source=source)
    for key in ('matches', 'training_sessions'):
        value = payload.get(key)
        if value is not None and not isinstance(value, list):
            raise DataUnavailable(f"{source} returned a non-list '{key}'", source=source)
    return {
        'matches': payload.get('matches') or [],
        'training_sessions': payload.get('training_sessions') or [],
    }


class GraphQLDataSource(TrainingDataSource):
    """Fetches from a Hasura GraphQL endpoint"""
    name = "graphql"

    def __init__(self, url: str, admin_secret: Optional[str] = None, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.admin_secret = admin_secret
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'GraphQLDataSource':
        return cls(
            url=config.GRAPHQL_URL,
            admin_secret=config.HASURA_ADMIN_SECRET,
            timeout=config.GRAPHQL_TIMEOUT_SECONDS
        )

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.admin_secret:
            headers['x-hasura-admin-secret'] = self.admin_secret
        return headers

    def fetch_training_cycle(self, query: TimelineQuery) -> Dict[str, Any]:
        body = {
            'query': PLAYER_TRAINING_CYCLE_QUERY,
            'variables': {
                'playerId': query.player_id,
                'startDate': query.start_date,
                'endDate': query.end_date,
            },
        }
        try:
            response = self.session.post(self.url, json=body, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except requests.RequestException as e:
            logger.error(f"GraphQL request to {self.url} failed: {e}")
            raise DataUnavailable(f"Failed to fetch training data: {e}", source=self.name) from e
        except ValueError as e:
            raise DataUnavailable(f"GraphQL endpoint returned invalid JSON: {e}", source=self.name) from e

        if not isinstance(result, dict):
            raise DataUnavailable("GraphQL endpoint returned an unexpected body", source=self.name)
        if result.get('errors'):
            messages = '; '.join(str(err.get('message', err)) if isinstance(err, dict) else str(err)
                                 for err in result['errors'])
            logger.error(f"GraphQL errors for player {query.player_id}: {messages}")
            raise DataUnavailable(f"GraphQL errors: {messages}", source=self.name)

        return _check_payload(result.get('data'), self.name)


class JsonFileDataSource(TrainingDataSource):
    """Reads exported payloads from a data directory

    Each player has one file, {player_id}.json, holding
    {"matches": [...], "training_sessions": [...]} as returned by GraphQL.
    Exports usually cover a whole season, so records are narrowed to the
    query window the same way the GraphQL query does it.
    """
    name = "json"

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)

    def _payload_file(self, player_id: str) -> Path:
        # Player ids become file names and must not reach outside data_dir
        if not player_id or Path(player_id).name != player_id:
            raise DataUnavailable(f"Invalid player id {player_id!r}", source=self.name)
        return self.data_dir / f"{player_id}.json"

    def fetch_training_cycle(self, query: TimelineQuery) -> Dict[str, Any]:
        path = self._payload_file(query.player_id)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DataUnavailable(f"No training data found for player {query.player_id}", source=self.name) from e
        except (IOError, OSError, json.JSONDecodeError) as e:
            raise DataUnavailable(f"Failed to read {path}: {str(e)}", source=self.name) from e

        payload = _check_payload(data, self.name)
        start, end = parse_window(query.start_date, query.end_date)
        return {
            key: [record for record in records if _dated_within(record, start, end)]
            for key, records in payload.items()
        }


def _dated_within(record: Any, start: date, end: date) -> bool:
    if not isinstance(record, dict):
        return True
    try:
        day = parse_iso_datetime(record.get('date'), field='date').date()
    except ParseError:
        # Kept so the collector reports the bad date
        return True
    return start <= day <= end


def get_data_source() -> TrainingDataSource:
    """Data source selected by DATA_SOURCE"""
    if config.DATA_SOURCE == 'json':
        return JsonFileDataSource(data_dir=config.DATA_DIR)
    if config.DATA_SOURCE == 'graphql':
        return GraphQLDataSource.from_config()
    raise ValueError(f"Unknown DATA_SOURCE: {config.DATA_SOURCE!r}")
