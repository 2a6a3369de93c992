import os
import unittest
from unittest.mock import Mock, patch

import redis

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from outreach.services import rate_limit
from outreach.services.rate_limit import InMemoryRateLimiter, RedisRateLimiter


class RateLimiterTests(unittest.TestCase):
    def tearDown(self):
        rate_limit.reset_rate_limiter_for_tests()

    def test_in_memory_limiter_blocks_after_limit(self):
        limiter = InMemoryRateLimiter()
        results = [limiter.hit("k", limit=2, window_seconds=60) for _ in range(3)]
        self.assertEqual([r.allowed for r in results], [True, True, False])
        self.assertEqual(results[-1].current_value, 3)
        self.assertGreater(results[-1].retry_after_seconds, 0)

    def test_keys_are_independent(self):
        limiter = InMemoryRateLimiter()
        limiter.hit("a", limit=1, window_seconds=60)
        self.assertTrue(limiter.hit("b", limit=1, window_seconds=60).allowed)

    def test_redis_limiter_sets_expiry_on_first_hit(self):
        client = Mock()
        client.incr.return_value = 1
        client.ttl.return_value = 60
        result = RedisRateLimiter(client).hit("k", limit=5, window_seconds=60)
        self.assertTrue(result.allowed)
        client.expire.assert_called_once_with("k", 60)

    def test_redis_outage_after_startup_counts_in_process(self):
        client = Mock()
        client.incr.side_effect = redis.ConnectionError("connection reset")
        limiter = RedisRateLimiter(client)
        with self.assertLogs("outreach.rate_limit", level="WARNING"):
            results = [limiter.hit("k", limit=1, window_seconds=60) for _ in range(2)]
        self.assertEqual([r.allowed for r in results], [True, False])
        self.assertGreater(results[-1].retry_after_seconds, 0)

    def test_unreachable_redis_falls_back_to_memory(self):
        broken = Mock()
        broken.ping.side_effect = ConnectionError("no redis")
        with patch("outreach.services.rate_limit.redis.Redis.from_url", return_value=broken):
            rate_limit.reset_rate_limiter_for_tests()
            self.assertIsInstance(rate_limit.get_rate_limiter(), InMemoryRateLimiter)
