"""Unit tests for the User domain model."""

import unittest
from datetime import datetime, timedelta, timezone

from domain.model.user import User, to_store_precision


class TestToStorePrecision(unittest.TestCase):

    def test_truncates_to_milliseconds(self):
        moment = datetime(2026, 10, 18, 5, 23, 4, 461523, tzinfo=timezone.utc)

        self.assertEqual(to_store_precision(moment), datetime(2026, 10, 18, 5, 23, 4, 461000, tzinfo=timezone.utc))

    def test_naive_is_read_as_utc(self):
        result = to_store_precision(datetime(2026, 10, 18, 5, 23, 4, 461000))

        self.assertEqual(result.tzinfo, timezone.utc)
        self.assertEqual(result.hour, 5)

    def test_other_zones_are_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))

        result = to_store_precision(datetime(2026, 10, 18, 7, 0, tzinfo=plus_two))

        self.assertEqual(result.tzinfo, timezone.utc)
        self.assertEqual(result.hour, 5)


class TestUserCreate(unittest.TestCase):

    def test_date_joined_has_store_precision(self):
        user = User.create(username='alex', password_hash='hash')

        self.assertEqual(user.date_joined.microsecond % 1000, 0)
        self.assertEqual(user.date_joined.tzinfo, timezone.utc)

    def test_to_safe_drops_password(self):
        user = User.create(username='alex', password_hash='hash', biography='bio')

        safe = user.to_safe()

        self.assertFalse(hasattr(safe, 'password_hash'))
        self.assertEqual((safe.id, safe.username, safe.biography), (user.id, 'alex', 'bio'))


if __name__ == '__main__':
    unittest.main()
