#!/usr/bin/env python3
"""GitHub Action entry point establishing the release context of a merge.

Reads the action inputs and the triggering event, decides whether a release
should be published and writes the decision as step outputs.
"""

import json
import logging
import sys
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from clients.github_client import GithubApiError, GithubAuthError, GithubClient
from configs.action_inputs import ActionInputError, ActionInputs
from establishers.context_establishers import ContextEstablishers
from establishers.merged_pr_establisher import ContextEstablishmentError, MergedPullRequestContextEstablisher
from utils.action_io import output_context
from utils.action_logging import configure_logging
from utils.build_context import BuildContext, default_outputs
from utils.event_context import EventContext, EventContextError
from utils.release_type_extractor import ReleaseTypeExtractor
from utils.version_finders import create_version_finder
from utils.version_incrementor import VersionIncrementor
from utils.versioning import VersionError

# Set up logging
logger = logging.getLogger(__name__)

FATAL_ERRORS = (
	ActionInputError,
	EventContextError,
	GithubAuthError,
	GithubApiError,
	ContextEstablishmentError,
	VersionError,
)


def build_establishers(inputs: ActionInputs, context: EventContext, github) -> ContextEstablishers:
	"""Wire the establishers for one run."""
	current_version_finder = create_version_finder(
		version_file=inputs.version_file,
		current_version=inputs.current_version,
		github=github,
		owner=context.owner,
		repo=context.repo,
	)
	return ContextEstablishers(
		MergedPullRequestContextEstablisher(
			inputs.release_branches,
			inputs.prerelease_branches,
			inputs.environment_branch,
			ReleaseTypeExtractor(),
			current_version_finder,
			VersionIncrementor(),
			github,
		)
	)


def run(
	environ: Optional[Mapping[str, str]] = None,
	event_path: Optional[str] = None,
	github=None,
) -> Optional[BuildContext]:
	"""Establish the build context and write the outputs.

	Returns:
		The established context, or None when no establisher applied

	Raises:
		Any of FATAL_ERRORS
	"""
	inputs = ActionInputs.from_env(environ)
	branches = ", ".join(inputs.release_branches + inputs.prerelease_branches)
	logger.info(f"Merges to branches: [{branches}] can trigger a release")
	if inputs.environment_branch:
		logger.info(f"Environment branch '{inputs.environment_branch}' produces prereleases")

	context = EventContext.from_env(environ, event_path=event_path)
	client = github or GithubClient(token=inputs.token)
	try:
		establishers = build_establishers(inputs, context, client)
		logger.info("Establishing context")
		build_context = establishers.establish_from(context)
	finally:
		if github is None:
			client.close()

	if build_context is None:
		logger.debug("No establisher found for context")
		logger.debug(context.model_dump_json(indent=2))
		output_context(default_outputs(), environ)
	else:
		output_context(build_context.to_outputs(), environ)
	return build_context


def main(argv: Optional[Sequence[str]] = None):
	"""CLI entry point for the release context action."""
	import argparse

	parser = argparse.ArgumentParser(
		description="Release Context - Decide whether a merged pull request should be released",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  establish-context
  establish-context --event-path event.json --verbose
  python -m establishers.action --event-path event.json --json
		"""
	)
	parser.add_argument("--event-path", required=False, help="Event payload file (defaults to GITHUB_EVENT_PATH)")
	parser.add_argument("--json", action="store_true", help="Also print the build context as JSON")
	parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
	args = parser.parse_args(argv)

	load_dotenv()
	configure_logging(args.verbose)

	try:
		build_context = run(event_path=args.event_path)
		if args.json:
			payload = build_context.model_dump(mode="json") if build_context else None
			print(json.dumps(payload, indent=2))
	except FATAL_ERRORS as e:
		fail(str(e), verbose=args.verbose)
	except KeyboardInterrupt:
		fail("Operation cancelled by user")
	except Exception as e:
		fail(f"Unexpected error: {e}", verbose=True)


def fail(message: str, verbose: bool = False):
	logger.error(message)
	if verbose:
		logger.debug("Detailed error information:", exc_info=True)
	sys.exit(1)


if __name__ == "__main__":
	main()
