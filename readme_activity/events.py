"""Turn GitHub public events into numbered-list friendly markdown lines."""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from readme_activity.exceptions import FetchError

logger = logging.getLogger(__name__)

URL_PREFIX = 'https://github.com'
DEFAULT_BOTS = frozenset({'dependabot[bot]'})


class EventKind(enum.Enum):
    ISSUE_COMMENT = 'IssueCommentEvent'
    ISSUES = 'IssuesEvent'
    PULL_REQUEST = 'PullRequestEvent'
    RELEASE = 'ReleaseEvent'
    OTHER = None

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


RECOGNIZED_KINDS = frozenset(kind for kind in EventKind if kind is not EventKind.OTHER)


@dataclass(frozen=True)
class ItemRef:
    """A link to an issue, pull request or release."""

    label: str
    url: str

    @classmethod
    def issue(cls, repo, number):
        return cls(f'#{number}', f'{URL_PREFIX}/{repo}/issues/{number}')

    @classmethod
    def pull(cls, repo, number):
        return cls(f'#{number}', f'{URL_PREFIX}/{repo}/pull/{number}')

    @classmethod
    def release(cls, repo, name=None, tag=None, url=None):
        label = name or tag or ''
        if not url:
            url = f'{URL_PREFIX}/{repo}/releases/tag/{tag}' if tag else f'{URL_PREFIX}/{repo}/releases'
        return cls(label, url)

    def to_markdown(self):
        return f'[{self.label}]({self.url})'


@dataclass(frozen=True)
class RepoRef:
    name: str

    def to_markdown(self):
        return f'[{self.name}]({URL_PREFIX}/{self.name})'


@dataclass(frozen=True)
class Event:
    kind: EventKind
    repo_name: str
    action: str = ''
    target: Optional[ItemRef] = None
    actor_login: Optional[str] = None
    merged: bool = False

    @classmethod
    def from_api(cls, item):
        """Build an event from one object of the GitHub events API."""
        kind = EventKind.parse(item.get('type'))
        repo = (item.get('repo') or {}).get('name', '')
        payload = item.get('payload') or {}
        action = payload.get('action') or ''

        target = None
        actor = None
        merged = False
        if kind in (EventKind.ISSUE_COMMENT, EventKind.ISSUES):
            issue = payload.get('issue') or {}
            if issue.get('number') is not None:
                target = ItemRef.issue(repo, issue['number'])
        elif kind is EventKind.PULL_REQUEST:
            pr = payload.get('pull_request') or {}
            number = pr.get('number', payload.get('number'))
            if number is not None:
                target = ItemRef.pull(repo, number)
            merged = bool(pr.get('merged'))
            actor = (pr.get('user') or {}).get('login')
        elif kind is EventKind.RELEASE:
            release = payload.get('release') or {}
            target = ItemRef.release(
                repo,
                name=release.get('name'),
                tag=release.get('tag_name'),
                url=release.get('html_url'),
            )

        if actor is None:
            actor = (item.get('actor') or {}).get('login')
        return cls(kind=kind, repo_name=repo, action=action, target=target,
                   actor_login=actor, merged=merged)


def capitalize(text):
    return text[:1].upper() + text[1:]


ISSUE_GLYPHS = {
    'opened': '❗️',
    'closed': '🔒',
    'reopened': '🔓',
}


def _target(event):
    return event.target.to_markdown() if event.target else ''


def _repo(event):
    return RepoRef(event.repo_name).to_markdown()


def _issue_comment(event):
    return f'🗣 Commented on {_target(event)} in {_repo(event)}'


def _issue(event):
    glyph = ISSUE_GLYPHS.get(event.action, '❗️')
    return f'{glyph} {capitalize(event.action)} issue {_target(event)} in {_repo(event)}'


def _pull_request(event):
    if event.merged:
        line = '🎉 Merged'
    else:
        glyph = '💪' if event.action == 'opened' else '❌'
        line = f'{glyph} {capitalize(event.action)}'
    return f'{line} PR {_target(event)} in {_repo(event)}'


def _release(event):
    return f'🚀 {capitalize(event.action)} release {_target(event)} in {_repo(event)}'


SERIALIZERS = {
    EventKind.ISSUE_COMMENT: _issue_comment,
    EventKind.ISSUES: _issue,
    EventKind.PULL_REQUEST: _pull_request,
    EventKind.RELEASE: _release,
}


def serialize(event):
    """Return the markdown line for ``event`` or None if it is not interesting."""
    serializer = SERIALIZERS.get(event.kind)
    if serializer is None:
        return None
    return serializer(event)


# filters

def is_recognized(event):
    return event.kind in RECOGNIZED_KINDS


def not_bot_pull_request(bots=DEFAULT_BOTS):
    def predicate(event):
        if event.kind is not EventKind.PULL_REQUEST or not event.actor_login:
            return True
        return event.actor_login not in bots
    return predicate


def not_release(event):
    return event.kind is not EventKind.RELEASE


def build_filters(no_dependabot=False, include_releases=True):
    filters = [is_recognized]
    if no_dependabot:
        filters.append(not_bot_pull_request())
    if not include_releases:
        filters.append(not_release)
    return filters


def collect_activity(fetch_page, limit, filters=(is_recognized,), page_size=100):
    """Collect up to ``limit`` unique lines, newest first.

    ``fetch_page(page, per_page)`` returns a list of :class:`Event`. Pages are
    requested in order until enough lines exist or the source runs dry; a
    :class:`FetchError` ends pagination instead of failing the run.
    """
    lines = []
    seen = set()
    page = 1
    inspected = 0
    while len(lines) < limit:
        try:
            events = fetch_page(page, page_size)
        except FetchError as exc:
            logger.info('Stopped fetching at page %d: %s', page, exc)
            break
        inspected += len(events)

        for event in events:
            if not all(check(event) for check in filters):
                continue
            line = serialize(event)
            if line is None or line in seen:
                continue
            seen.add(line)
            lines.append(line)
            if len(lines) >= limit:
                break

        if len(events) < page_size:
            break
        page += 1

    logger.debug('%d events inspected, %d eligible lines.', inspected, len(lines))
    if lines and len(lines) < limit:
        logger.info('Found %d activities, which is less than the %d requested.', len(lines), limit)
    return lines
