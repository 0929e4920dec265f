import json
import os
from dataclasses import dataclass
from typing import Optional

from readme_activity.exceptions import ConfigError
from readme_activity.readme import END_MARKER, START_MARKER

DEFAULT_COMMIT_NAME = 'github-actions[bot]'
DEFAULT_COMMIT_EMAIL = '41898282+github-actions[bot]@users.noreply.github.com'
DEFAULT_COMMIT_MSG = '⚡ Update README with the recent activity'


def parse_bool(value, name):
    try:
        parsed = json.loads(value.strip().lower())
    except (AttributeError, ValueError):
        raise ConfigError(f"The entered {name} is not valid: cannot parse string ('{value}').") from None
    if not isinstance(parsed, bool):
        raise ConfigError(f'The entered {name} is not valid: parsed type is {type(parsed).__name__}.')
    return parsed


def parse_positive_int(value, name):
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"The entered {name} is not valid: cannot parse string ('{value}').") from None
    if parsed < 1:
        raise ConfigError(f'The entered {name} is not valid: {parsed} is not a positive number.')
    return parsed


def get_input(environ, name):
    """Read an action input, falling back to a plain environment variable."""
    value = environ.get(f'INPUT_{name}')
    if value is None or value.strip() == '':
        value = environ.get(name)
    if value is None or value.strip() == '':
        return None
    return value.strip()


@dataclass
class Settings:
    username: str
    token: Optional[str] = None
    commit_name: str = DEFAULT_COMMIT_NAME
    commit_email: str = DEFAULT_COMMIT_EMAIL
    commit_msg: str = DEFAULT_COMMIT_MSG
    max_lines: int = 5
    target_file: str = 'README.md'
    no_dependabot: bool = False
    include_releases: bool = True
    no_commit: bool = False
    empty_commit_msg: Optional[str] = None
    empty_commit_days: int = 50
    start_marker: str = START_MARKER
    end_marker: str = END_MARKER

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        username = get_input(environ, 'GH_USERNAME')
        if not username:
            repo = environ.get('GITHUB_REPOSITORY') or ''
            if '/' in repo:
                username = repo.split('/')[0]
        if not username:
            raise ConfigError('GH_USERNAME is required (or run inside a GitHub repository).')

        settings = cls(username=username, token=get_input(environ, 'GITHUB_TOKEN'))
        for field, name in (('commit_name', 'COMMIT_NAME'),
                            ('commit_email', 'COMMIT_EMAIL'),
                            ('commit_msg', 'COMMIT_MSG'),
                            ('target_file', 'TARGET_FILE'),
                            ('empty_commit_msg', 'EMPTY_COMMIT_MSG')):
            value = get_input(environ, name)
            if value is not None:
                setattr(settings, field, value)

        for field, name in (('no_dependabot', 'NO_DEPENDABOT'),
                            ('include_releases', 'INCLUDE_RELEASES'),
                            ('no_commit', 'NO_COMMIT')):
            value = get_input(environ, name)
            if value is not None:
                setattr(settings, field, parse_bool(value, name))

        for field, name in (('max_lines', 'MAX_LINES'),
                            ('empty_commit_days', 'EMPTY_COMMIT_DAYS')):
            value = get_input(environ, name)
            if value is not None:
                setattr(settings, field, parse_positive_int(value, name))

        return settings
