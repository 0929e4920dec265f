import logging
import subprocess
import time

from readme_activity.exceptions import CommitError

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT = 'nothing to commit'


class GitRunner:
    def __init__(self, cwd=None):
        self.cwd = cwd

    def run(self, *args):
        """Run one git command and return its stdout.

        A failing command whose output says there is nothing to commit is
        not an error and returns None.
        """
        cmd = ['git', *args]
        logger.debug('Running %s', ' '.join(cmd))
        res = subprocess.run(cmd, cwd=self.cwd, capture_output=True, text=True, check=False)
        output = (res.stdout or '') + (res.stderr or '')
        if res.returncode != 0:
            if NOTHING_TO_COMMIT in output:
                return None
            raise CommitError(cmd, res.returncode, output)
        return res.stdout

    def configure_identity(self, name, email):
        self.run('config', '--global', 'user.email', email)
        self.run('config', '--global', 'user.name', name)

    def commit_and_push(self, path, name, email, message):
        """Stage ``path``, commit it and push. Returns False if there was nothing to commit."""
        self.configure_identity(name, email)
        self.run('add', path)
        if self.run('commit', '-m', message) is None:
            logger.info('Nothing to commit.')
            return False
        self.run('push')
        logger.info('Changes pushed.')
        return True

    def empty_commit_and_push(self, name, email, message):
        self.configure_identity(name, email)
        self.run('commit', '--allow-empty', '-m', message)
        self.run('push')
        logger.info('Empty commit pushed.')

    def days_since_last_commit(self, now=None):
        try:
            out = self.run('log', '-1', '--format=%ct')
        except CommitError as exc:
            logger.debug('No commit history available: %s', exc)
            return None
        if not out or not out.strip():
            return None
        now = time.time() if now is None else now
        return (now - int(out.strip())) / 86400
