"""Global pytest configuration."""

import os

# Keep tests on in-process storage regardless of the developer's environment
os.environ.pop("REDIS_URL", None)
os.environ.pop("LOCAL_STATE_URL", None)
os.environ.setdefault("API_BASE_URL", "http://testserver")
