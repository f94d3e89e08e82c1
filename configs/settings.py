#!/usr/bin/env python3
"""Resolve per-run scribe settings from CLI flags and SCRIBE_* environment variables.

Flags override the environment. The result is an immutable ScribeSettings that
is passed explicitly to every pipeline stage.
"""
from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Pattern, Sequence

from configs.config import Config


ENV_PREFIX = "SCRIBE_"
REQUIRED_FIELDS = ("start", "end", "owner", "repo", "token", "jira_host")


class ConfigError(Exception):
	def __init__(self, message: str, code: str = "VALIDATION") -> None:
		super().__init__(message)
		self.code = code


@dataclass(frozen=True)
class ScribeSettings:
	start: str
	end: str
	owner: str
	repo: str
	token: str
	jira_host: str
	ticket_pattern: str
	ticket_regex: Optional[Pattern[str]]
	target: str = Config.DEFAULT_TARGET
	dry_run: bool = False
	verbose: bool = False

	@property
	def target_commitish(self) -> str:
		return self.start if self.target == "start" else self.end

	def __repr__(self) -> str:
		# keep the token out of logs and tracebacks
		return (
			f"ScribeSettings(start={self.start!r}, end={self.end!r}, owner={self.owner!r}, "
			f"repo={self.repo!r}, jira_host={self.jira_host!r}, ticket_pattern={self.ticket_pattern!r}, "
			f"target={self.target!r}, dry_run={self.dry_run!r})"
		)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="release-scribe",
		description="Create a GitHub release from the pull requests merged between two refs",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Every string flag falls back to the SCRIBE_<NAME> environment variable
(SCRIBE_START, SCRIBE_END, SCRIBE_OWNER, SCRIBE_REPO, SCRIBE_TOKEN,
SCRIBE_JIRA, SCRIBE_REGEX, SCRIBE_TARGET).

Examples:
  release-scribe -owner acme -repo api -start production -end master -dryrun
  SCRIBE_TOKEN=... release-scribe -owner acme -repo api -start v1.2 -end v1.3 -regex 'ABC|XYZ'
		"""
	)
	parser.add_argument("-start", "--start", dest="start", help="Where to start the compare")
	parser.add_argument("-end", "--end", dest="end", help="Where to end the compare")
	parser.add_argument("-owner", "--owner", dest="owner", help="The repository owner")
	parser.add_argument("-repo", "--repo", dest="repo", help="The repository name")
	parser.add_argument("-token", "--token", dest="token", help="Access token")
	parser.add_argument("-jira", "--jira", dest="jira", help=f"JIRA host for ticket links (default {Config.DEFAULT_JIRA_HOST})")
	parser.add_argument("-regex", "--regex", dest="regex", help=f"Ticket prefix alternation, e.g. 'ABC|XYZ' (default {Config.DEFAULT_TICKET_PATTERN})")
	parser.add_argument("-target", "--target", dest="target", help=f"Ref the release points at: start or end (default {Config.DEFAULT_TARGET})")
	parser.add_argument("-dryrun", "--dryrun", "--dry-run", dest="dryrun", action="store_true", help="Print the release instead of creating it")
	parser.add_argument("-verbose", "--verbose", "-v", dest="verbose", action="store_true", help="Enable verbose logging")
	return parser


def _pick(flag_value: Optional[str], environ: Mapping[str, str], name: str, default: str = "") -> str:
	if flag_value is not None:
		return flag_value.strip()
	# a set-but-empty variable counts as unset
	return (environ.get(ENV_PREFIX + name) or "").strip() or default


def compile_ticket_regex(pattern: str) -> Optional[Pattern[str]]:
	"""Compile a ticket prefix alternation such as 'ABC|XYZ' into a ticket matcher.

	Returns None for an empty pattern, which disables ticket linking.
	Raises ConfigError if the pattern is not a valid regular expression.
	"""
	if not pattern:
		return None
	try:
		return re.compile(rf"(?:{pattern})-(?:\d+)")
	except re.error as e:
		raise ConfigError(f"invalid ticket pattern {pattern!r}: {e}") from e


def settings_from_args(args: argparse.Namespace, environ: Mapping[str, str]) -> ScribeSettings:
	"""Merge parsed flags with environment fallbacks and validate the result.

	Raises:
		ConfigError: If a required value is empty, the target is unknown or the
			ticket pattern does not compile
	"""
	values = {
		"start": _pick(args.start, environ, "START"),
		"end": _pick(args.end, environ, "END"),
		"owner": _pick(args.owner, environ, "OWNER"),
		"repo": _pick(args.repo, environ, "REPO"),
		"token": _pick(args.token, environ, "TOKEN"),
		"jira_host": _pick(args.jira, environ, "JIRA", Config.DEFAULT_JIRA_HOST),
	}
	missing = [name for name in REQUIRED_FIELDS if not values[name]]
	if missing:
		raise ConfigError(f"missing flags: {', '.join(missing)}", code="MISSING")

	target = _pick(args.target, environ, "TARGET", Config.DEFAULT_TARGET).lower()
	if target not in Config.TARGET_CHOICES:
		raise ConfigError(f"invalid target {target!r}: expected one of {', '.join(Config.TARGET_CHOICES)}")

	pattern = _pick(args.regex, environ, "REGEX", Config.DEFAULT_TICKET_PATTERN)
	return ScribeSettings(
		ticket_pattern=pattern,
		ticket_regex=compile_ticket_regex(pattern),
		target=target,
		dry_run=bool(args.dryrun),
		verbose=bool(args.verbose),
		**values,
	)


def resolve_settings(argv: Optional[Sequence[str]] = None, environ: Optional[Mapping[str, str]] = None) -> ScribeSettings:
	"""Parse argv and the environment into ScribeSettings.

	On any configuration error prints the problem and the usage text to stderr
	and exits with status 1, before any network activity.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	try:
		return settings_from_args(args, os.environ if environ is None else environ)
	except ConfigError as e:
		print(f"Error: {e}", file=sys.stderr)
		parser.print_help(sys.stderr)
		sys.exit(1)
