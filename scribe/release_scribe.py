#!/usr/bin/env python3
"""Release scribe: create a GitHub release from the pull requests merged between two refs.

The run is a single linear pipeline: compare the refs, extract merged pull
request numbers, fetch and link their titles, compose the body, then publish
or print it. Every failure is fatal and handled once, in main().
"""

import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from clients.github_client import GithubClient, GithubApiError
from configs.settings import ScribeSettings, resolve_settings
from utils.compare_fetcher import fetch_commits
from utils.pr_extractor import extract_pull_request_numbers
from utils.release_composer import build_release_draft, resolve_release_lines
from utils.release_publisher import ReleasePublisher
from utils.scribe_errors import ScribeError
from utils.scribe_models import ReleaseDraft, ReleaseInfo
from utils.ticket_linker import TicketLinker

# Set up logging
logger = logging.getLogger(__name__)


class ReleaseScribe:
	"""Runs the compare, extract, resolve, compose and publish stages for one settings bundle."""
	
	def __init__(self, settings: ScribeSettings, client: Optional[GithubClient] = None):
		"""Initialize the scribe.
		
		Args:
			settings: Resolved, validated settings for this run
			client: Optional GithubClient. If None, one is built from the settings token.
		"""
		self.settings = settings
		self.client = client or GithubClient(settings.token)
		self.linker = TicketLinker(settings.ticket_regex, settings.jira_host)
		self.publisher = ReleasePublisher(self.client)
	
	def draft_release(self) -> ReleaseDraft:
		"""Build the release draft without publishing it.
		
		Raises:
			ScribeError: If comparing, parsing or fetching any pull request fails
		"""
		s = self.settings
		commits = fetch_commits(self.client, s.owner, s.repo, s.start, s.end)
		numbers = extract_pull_request_numbers(commits)
		lines = resolve_release_lines(self.client, s.owner, s.repo, numbers, self.linker)
		return build_release_draft(lines, s.target_commitish)
	
	def run(self) -> Optional[ReleaseInfo]:
		"""Draft the release and publish it, or print it on a dry run.
		
		Returns:
			The created release, or None on a dry run
			
		Raises:
			ScribeError: On any stage failure; no release is created in that case
		"""
		s = self.settings
		logger.info(f"Drafting release for {s.owner}/{s.repo} {s.start}...{s.end}")
		draft = self.draft_release()
		return self.publisher.publish(s.owner, s.repo, draft, dry_run=s.dry_run)
	
	def close(self) -> None:
		"""Close the underlying GitHub session."""
		self.client.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
	"""CLI entry point for the release scribe."""
	# Load environment variables from .env file
	load_dotenv()
	settings = resolve_settings(argv)
	
	# Set up logging
	log_level = logging.DEBUG if settings.verbose else logging.INFO
	logging.basicConfig(
		level=log_level,
		format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
	)
	
	# Suppress verbose logs from the HTTP client unless in debug mode
	if not settings.verbose:
		logging.getLogger("clients.github_client").setLevel(logging.WARNING)
	
	scribe = None
	try:
		scribe = ReleaseScribe(settings)
		scribe.run()
	except (ScribeError, GithubApiError) as e:
		logger.error(str(e))
		sys.exit(1)
	finally:
		if scribe is not None:
			scribe.close()
	return 0


if __name__ == "__main__":
	sys.exit(main())
