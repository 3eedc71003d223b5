import os
from typing import Dict, Any

class Config:
	"""Configuration for the release context action."""

	# GitHub REST Configuration
	GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip('/')
	GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or os.getenv("GITHUB_PAT")
	HTTP_TIMEOUT_S = int(os.getenv("HTTP_TIMEOUT_S", "30"))
	USER_AGENT = os.getenv("USER_AGENT", "release-context-action/1.0")

	# Pagination
	GITHUB_PAGE_SIZE = int(os.getenv("GITHUB_PAGE_SIZE", "100"))
	# Safety limit on pages fetched per listing (0 disables the limit)
	GITHUB_MAX_PAGES = int(os.getenv("GITHUB_MAX_PAGES", "0"))

	# Logging
	LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

	# Baseline used when no version tag exists yet
	DEFAULT_BASELINE_VERSION = "0.0.0"

	@classmethod
	def get_github_config(cls) -> Dict[str, Any]:
		"""Get GitHub configuration for the REST client."""
		return {
			"api_url": cls.GITHUB_API_URL,
			"token": cls.GITHUB_TOKEN,
			"timeout_s": cls.HTTP_TIMEOUT_S,
			"user_agent": cls.USER_AGENT,
			"page_size": cls.GITHUB_PAGE_SIZE,
			"max_pages": cls.GITHUB_MAX_PAGES,
		}
