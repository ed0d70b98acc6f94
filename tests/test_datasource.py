import unittest
import tempfile
import shutil
import json
from unittest.mock import MagicMock, patch

# Add the project root to the path
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import requests

from trainingcycle.datasource import (
    GraphQLDataSource,
    JsonFileDataSource,
    PLAYER_TRAINING_CYCLE_QUERY,
    get_data_source
)
from trainingcycle.errors import DataUnavailable, ParseError
from trainingcycle.models import TimelineQuery
from trainingcycle.timeline import build_player_timeline


PAYLOAD = {
    'matches': [
        {'id': 'm1', 'date': '2024-01-05', 'home_team': 'Lyon', 'away_team': 'Nantes'},
        {'id': 'm2', 'date': '2024-01-12', 'home_team': 'Lens', 'away_team': 'Lyon'},
    ],
    'training_sessions': [
        {'id': 't1', 'date': '2024-01-07', 'type': 'Recovery', 'intensity': 'Low',
         'duration': 45, 'attendance': [{'attended': True}]},
    ],
}


def _response(body=None, status=200, json_error=None):
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestGraphQLDataSource(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.source = GraphQLDataSource('https://hasura.example/v1/graphql', admin_secret='s3cret',
                                         timeout=5, session=self.session)
        self.query = TimelineQuery(player_id='p-1', start_date='2024-01-01', end_date='2024-01-31')

    def test_posts_query_with_variables(self):
        self.session.post.return_value = _response({'data': PAYLOAD})

        result = self.source.fetch_training_cycle(self.query)

        self.assertEqual(result, PAYLOAD)
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], 'https://hasura.example/v1/graphql')
        self.assertEqual(kwargs['json']['query'], PLAYER_TRAINING_CYCLE_QUERY)
        self.assertEqual(kwargs['json']['variables'],
                         {'playerId': 'p-1', 'startDate': '2024-01-01', 'endDate': '2024-01-31'})
        self.assertEqual(kwargs['headers']['x-hasura-admin-secret'], 's3cret')
        self.assertEqual(kwargs['timeout'], 5)

    def test_no_secret_header_without_secret(self):
        source = GraphQLDataSource('https://hasura.example/v1/graphql', session=self.session)
        self.session.post.return_value = _response({'data': PAYLOAD})

        source.fetch_training_cycle(self.query)

        self.assertNotIn('x-hasura-admin-secret', self.session.post.call_args[1]['headers'])

    def test_missing_lists_default_to_empty(self):
        self.session.post.return_value = _response({'data': {'matches': None}})
        self.assertEqual(self.source.fetch_training_cycle(self.query),
                         {'matches': [], 'training_sessions': []})

    def test_connection_error(self):
        self.session.post.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(DataUnavailable) as ctx:
            self.source.fetch_training_cycle(self.query)
        self.assertEqual(ctx.exception.source, 'graphql')

    def test_timeout(self):
        self.session.post.side_effect = requests.Timeout("timed out")
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)

    def test_http_error(self):
        self.session.post.return_value = _response(status=503)
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)

    def test_invalid_json(self):
        self.session.post.return_value = _response(json_error=ValueError("Expecting value"))
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)

    def test_graphql_errors(self):
        self.session.post.return_value = _response({
            'errors': [{'message': 'field "matches" not found in type: query_root'}]
        })
        with self.assertRaises(DataUnavailable) as ctx:
            self.source.fetch_training_cycle(self.query)
        self.assertIn('matches', str(ctx.exception))

    def test_non_object_data(self):
        self.session.post.return_value = _response({'data': ['unexpected']})
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)

    def test_from_config(self):
        with patch('trainingcycle.config.GRAPHQL_URL', 'http://graphql.local/v1/graphql'), \
                patch('trainingcycle.config.HASURA_ADMIN_SECRET', None), \
                patch('trainingcycle.config.GRAPHQL_TIMEOUT_SECONDS', 3.0):
            source = GraphQLDataSource.from_config()
        self.assertEqual(source.url, 'http://graphql.local/v1/graphql')
        self.assertIsNone(source.admin_secret)
        self.assertEqual(source.timeout, 3.0)


class TestJsonFileDataSource(unittest.TestCase):
    def setUp(self):
        """Set up test environment with temporary directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.source = JsonFileDataSource(data_dir=self.temp_dir)
        self.query = TimelineQuery(player_id='p-1', start_date='2024-01-01', end_date='2024-01-31')

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def _write(self, name, content):
        with open(os.path.join(self.temp_dir, name), 'w', encoding='utf-8') as f:
            f.write(content)

    def test_reads_player_file(self):
        self._write('p-1.json', json.dumps(PAYLOAD))
        self._write('p-2.json', json.dumps({'matches': [], 'training_sessions': []}))

        self.assertEqual(self.source.fetch_training_cycle(self.query), PAYLOAD)

    def test_unknown_player_is_unavailable(self):
        self._write('training_cycle.json', json.dumps(PAYLOAD))
        self._write('p-1.json', json.dumps(PAYLOAD))

        for player_id in ('alice', 'nobody-such'):
            query = TimelineQuery(player_id=player_id, start_date='2024-01-01', end_date='2024-01-31')
            with self.assertRaises(DataUnavailable):
                self.source.fetch_training_cycle(query)

    def test_player_id_cannot_leave_data_dir(self):
        nested = os.path.join(self.temp_dir, 'players')
        os.makedirs(nested)
        self._write('secret.json', json.dumps(PAYLOAD))
        source = JsonFileDataSource(data_dir=nested)
        query = TimelineQuery(player_id='../secret', start_date='2024-01-01', end_date='2024-01-31')

        with self.assertRaises(DataUnavailable):
            source.fetch_training_cycle(query)

    def test_records_outside_window_are_left_out(self):
        season = {
            'matches': PAYLOAD['matches'] + [
                {'id': 'm0', 'date': '2023-12-20', 'home_team': 'Nice', 'away_team': 'Lyon'},
                {'id': 'm3', 'date': '2024-02-02T19:00:00Z', 'home_team': 'Lyon', 'away_team': 'Metz'},
            ],
            'training_sessions': PAYLOAD['training_sessions'] + [
                {'id': 't9', 'date': '2024-01-31T23:30:00', 'attendance': [{'attended': True}]},
                {'id': 't0', 'date': '2023-12-31', 'attendance': [{'attended': True}]},
            ],
        }
        self._write('p-1.json', json.dumps(season))

        result = self.source.fetch_training_cycle(self.query)

        self.assertEqual([m['id'] for m in result['matches']], ['m1', 'm2'])
        self.assertEqual([t['id'] for t in result['training_sessions']], ['t1', 't9'])

    def test_unparseable_date_still_fails_the_build(self):
        self._write('p-1.json', json.dumps({
            'matches': [{'id': 'm1', 'date': 'soon', 'home_team': 'A', 'away_team': 'B'}],
            'training_sessions': [],
        }))

        self.assertEqual(len(self.source.fetch_training_cycle(self.query)['matches']), 1)
        with self.assertRaises(ParseError):
            build_player_timeline(self.source, self.query)

    def test_missing_file(self):
        with self.assertRaises(DataUnavailable) as ctx:
            self.source.fetch_training_cycle(self.query)
        self.assertEqual(ctx.exception.source, 'json')

    def test_corrupt_file(self):
        self._write('p-1.json', '{"matches": [')
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)

    def test_non_list_collection(self):
        self._write('p-1.json', json.dumps({'matches': {'id': 'm1'}}))
        with self.assertRaises(DataUnavailable):
            self.source.fetch_training_cycle(self.query)


class TestBuildPlayerTimeline(unittest.TestCase):
    def setUp(self):
        self.query = TimelineQuery(player_id='p-1', start_date='2024-01-01', end_date='2024-01-31')

    def test_fetch_then_build(self):
        source = MagicMock()
        source.fetch_training_cycle.return_value = PAYLOAD

        entries = build_player_timeline(source, self.query)

        source.fetch_training_cycle.assert_called_once_with(self.query)
        self.assertEqual([e.daysBeforeMatch for e in entries], [0, 5, 0])

    def test_fetch_failure_propagates(self):
        source = MagicMock()
        source.fetch_training_cycle.side_effect = DataUnavailable("down", source="graphql")

        with self.assertRaises(DataUnavailable):
            build_player_timeline(source, self.query)

    def test_inverted_window_fails_before_fetch(self):
        source = MagicMock()
        query = TimelineQuery(player_id='p-1', start_date='2024-02-01', end_date='2024-01-01')

        with self.assertRaises(ParseError):
            build_player_timeline(source, query)
        source.fetch_training_cycle.assert_not_called()


class TestGetDataSource(unittest.TestCase):
    def test_json_source(self):
        with patch('trainingcycle.config.DATA_SOURCE', 'json'), patch('trainingcycle.config.DATA_DIR', '/tmp/x'):
            source = get_data_source()
        self.assertIsInstance(source, JsonFileDataSource)

    def test_graphql_source(self):
        with patch('trainingcycle.config.DATA_SOURCE', 'graphql'):
            self.assertIsInstance(get_data_source(), GraphQLDataSource)

    def test_unknown_source(self):
        with patch('trainingcycle.config.DATA_SOURCE', 'ftp'):
            with self.assertRaises(ValueError):
                get_data_source()


if __name__ == '__main__':
    unittest.main()
