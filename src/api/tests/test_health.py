"""Tests for the health check endpoint."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from api.main import app, DATABASE_NAME


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_responds(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['services']['mongodb']['status'], 'healthy')
        self.assertTrue(data['timestamp'].endswith('Z'))

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_not_configured(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['status'], 'degraded')

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_ping_fails(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")
        mock_get_client.return_value = mock_client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("timed out", response.json()['services']['mongodb']['message'])


class TestLifespan(unittest.TestCase):
    """Startup index creation."""

    @patch('api.main.MongoUserRepository')
    @patch('api.main.get_mongodb_client')
    def test_ensures_indexes_on_startup(self, mock_get_client, mock_repo_cls):
        mock_client = MagicMock()
        mock_get_client.return_value = mock_client
        mock_repo_cls.return_value.ensure_indexes.return_value = True

        with TestClient(app):
            pass

        mock_repo_cls.assert_called_once_with(mock_client[DATABASE_NAME])
        mock_repo_cls.return_value.ensure_indexes.assert_called_once()

    @patch('api.main.MongoUserRepository')
    @patch('api.main.get_mongodb_client')
    def test_skips_indexes_without_mongodb(self, mock_get_client, mock_repo_cls):
        mock_get_client.return_value = None

        with TestClient(app):
            pass

        mock_repo_cls.assert_not_called()


if __name__ == '__main__':
    unittest.main()
