"""Pytest configuration and fixtures."""

import os

# Keep tests away from any real Cosmos DB account or LLM key
os.environ.pop("COSMOS_ENDPOINT", None)
os.environ["COSMOS_EMULATOR"] = "false"
os.environ.pop("DEEPSEEK_API_KEY", None)
os.environ.pop("REVIEW_TIMEZONE", None)
os.environ.pop("APP_ENV", None)
