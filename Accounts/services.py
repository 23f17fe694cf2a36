import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


class LoginAttemptService:
    """
    Counts failed logins per email in the cache.
    An email is locked once it reaches LOGIN_MAX_ATTEMPTS failures;
    the counter expires LOGIN_LOCK_MINUTES after the last failure.
    """

    KEY_PREFIX = "login-attempts:"

    @classmethod
    def _key(cls, email):
        return f"{cls.KEY_PREFIX}{(email or '').strip().lower()}"

    @classmethod
    def is_locked(cls, email):
        return cache.get(cls._key(email), 0) >= settings.LOGIN_MAX_ATTEMPTS

    @classmethod
    def register_failure(cls, email):
        key = cls._key(email)
        count = cache.get(key, 0) + 1
        cache.set(key, count, timeout=settings.LOGIN_LOCK_MINUTES * 60)

        if count >= settings.LOGIN_MAX_ATTEMPTS:
            logger.warning("Login locked for %s after %s failed attempts", email, count)
        return count

    @classmethod
    def reset(cls, email):
        cache.delete(cls._key(email))
