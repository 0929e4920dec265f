import argparse
import logging
import os

from readme_activity.config import Settings, parse_positive_int
from readme_activity.events import build_filters, collect_activity
from readme_activity.exceptions import ActivityError
from readme_activity.git import GitRunner
from readme_activity.github import GitHubEvents
from readme_activity.readme import patch, read_document, write_document

logger = logging.getLogger('readme_activity')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='readme-activity',
        description='Update the recent activity section of a README and push it.')
    parser.add_argument('--user', help='GitHub username (defaults to GH_USERNAME)')
    parser.add_argument('--max-lines', help='Number of activity lines to show')
    parser.add_argument('--file', dest='target_file', help='Document to update (defaults to README.md)')
    parser.add_argument('--no-commit', action='store_true', default=None, help='Write the file but do not commit')
    parser.add_argument('--no-dependabot', action='store_true', default=None, help='Hide PRs opened by dependabot')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output')
    return parser


def load_settings(args, environ=None):
    environ = dict(os.environ if environ is None else environ)
    if args.user:
        environ['INPUT_GH_USERNAME'] = args.user
    settings = Settings.from_env(environ)
    if args.max_lines is not None:
        settings.max_lines = parse_positive_int(args.max_lines, 'MAX_LINES')
    if args.target_file:
        settings.target_file = args.target_file
    if args.no_commit:
        settings.no_commit = True
    if args.no_dependabot:
        settings.no_dependabot = True
    return settings


def handle_no_activity(settings, git):
    if not settings.empty_commit_msg or settings.no_commit:
        logger.info('No PullRequest/Issue/IssueComment/Release events found. '
                    'Leaving %s unchanged with previous activity.', settings.target_file)
        return
    days = git.days_since_last_commit()
    if days is None or days < settings.empty_commit_days:
        logger.info('No activity found and the last commit is recent, nothing to do.')
        return
    logger.info('No activity found for %.0f days, pushing an empty commit.', days)
    git.empty_commit_and_push(settings.commit_name, settings.commit_email, settings.empty_commit_msg)


def run(settings, source=None, git=None):
    """Fetch activity, patch the document and commit it. Returns a status message."""
    source = source or GitHubEvents(settings.username, token=settings.token)
    git = git or GitRunner()

    logger.info('Fetching activity for %s', settings.username)
    filters = build_filters(settings.no_dependabot, settings.include_releases)
    lines = collect_activity(source.fetch_page, settings.max_lines, filters)
    logger.debug('Activity for %s: %d relevant events found.', settings.username, len(lines))

    document = read_document(settings.target_file)
    # checked before the empty case so a broken README is reported either way
    result = patch(document, lines, settings.start_marker, settings.end_marker)

    if not lines:
        handle_no_activity(settings, git)
        return 'No activity found.'

    if not result.changed:
        return f'No changes to {settings.target_file} necessary.'

    write_document(settings.target_file, result.lines)
    logger.info('Wrote %d activity line(s) to %s.', len(lines), settings.target_file)

    if settings.no_commit:
        return f'Wrote to {settings.target_file}, commit skipped.'

    if git.commit_and_push(settings.target_file, settings.commit_name,
                           settings.commit_email, settings.commit_msg):
        return 'Pushed to remote repository.'
    return 'Nothing to commit.'


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        settings = load_settings(args)
        message = run(settings)
    except ActivityError as exc:
        logger.error('%s', exc)
        return 1
    except OSError as exc:
        logger.error('Could not update %s: %s', getattr(exc, 'filename', None) or 'document', exc)
        return 1
    logger.info(message)
    return 0
