import os
from typing import Dict, Any

class Config:
	"""Configuration for the release scribe."""
	
	# GitHub REST configuration
	GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip('/')
	HTTP_TIMEOUT_S = int(os.getenv("HTTP_TIMEOUT_S", "30"))
	USER_AGENT = os.getenv("SCRIBE_USER_AGENT", "release-scribe/1.0")

	# Compare view pagination
	COMPARE_PER_PAGE = int(os.getenv("COMPARE_PER_PAGE", "100"))
	COMPARE_MAX_PAGES = int(os.getenv("COMPARE_MAX_PAGES", "50"))

	# Release publishing
	RELEASE_BODY_MAX_CHARS = int(os.getenv("RELEASE_BODY_MAX_CHARS", "125000"))
	RELEASE_NAME_FORMAT = "%Y-%m-%d.%H%M"

	# Ticket linking defaults, used when SCRIBE_JIRA / SCRIBE_REGEX are unset
	DEFAULT_JIRA_HOST = "weknowtraining.atlassian.net"
	DEFAULT_TICKET_PATTERN = "WKS|PSD"

	# Which compared ref the release tag points at
	TARGET_CHOICES = ("start", "end")
	DEFAULT_TARGET = "end"
	
	@classmethod
	def get_github_config(cls) -> Dict[str, Any]:
		"""Get GitHub configuration for the REST client."""
		return {
			"base_url": cls.GITHUB_API_URL,
			"timeout_s": cls.HTTP_TIMEOUT_S,
			"user_agent": cls.USER_AGENT,
		}

	@classmethod
	def get_compare_config(cls) -> Dict[str, int]:
		"""Get compare view pagination configuration.
		
		Returns:
			Mapping with page size and the maximum number of pages to follow.
		"""
		return {
			"per_page": cls.COMPARE_PER_PAGE,
			"max_pages": cls.COMPARE_MAX_PAGES,
		}
