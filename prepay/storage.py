import threading
from collections import Counter

from prepay.models.submission import FILE_FIELDS, Submission, gen_submission_id, utcnow
from prepay.models.user import User

ALL_SENTINEL = "전체"


class SubmissionStore:
    """Process-lifetime, in-memory collection of submissions keyed by id.

    Every operation takes the store lock, so a single instance can be shared
    by the threads of a Flask server. Records handed out are copies; callers
    change stored data through ``update`` only.
    """

    def __init__(self, filter_field="hospital", all_sentinel=ALL_SENTINEL):
        self.filter_field = filter_field
        self.all_sentinel = all_sentinel
        self._submissions = {}
        self._users = {}
        self._lock = threading.Lock()
        self._last_created_at = None

    # ------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------
    def create(self, data):
        fields = {k: data.get(k) for k in Submission.UPDATABLE}
        fields["status"] = fields["status"] or "pending"
        # attachment fields are all set or all empty
        if not all(fields[f] for f in FILE_FIELDS):
            for f in FILE_FIELDS:
                fields[f] = None

        with self._lock:
            sid = gen_submission_id()
            while sid in self._submissions:
                sid = gen_submission_id()

            created_at = utcnow()
            if self._last_created_at and created_at < self._last_created_at:
                created_at = self._last_created_at
            self._last_created_at = created_at

            submission = Submission(id=sid, created_at=created_at, **fields)
            self._submissions[sid] = submission
            return submission.copy()

    def get_by_id(self, submission_id):
        with self._lock:
            submission = self._submissions.get(submission_id)
            return submission.copy() if submission else None

    def list(self, filter_value=None):
        if not filter_value or filter_value == self.all_sentinel:
            return self._sorted(lambda s: True)
        return self.list_by(self.filter_field, filter_value)

    def list_by(self, field, value):
        return self._sorted(lambda s: getattr(s, field, None) == value)

    def _sorted(self, predicate):
        with self._lock:
            matches = [s.copy() for s in self._submissions.values() if predicate(s)]
        return sorted(matches, key=lambda s: s.created_at, reverse=True)

    def update(self, submission_id, fields):
        changes = {k: v for k, v in fields.items() if k in Submission.UPDATABLE}
        with self._lock:
            existing = self._submissions.get(submission_id)
            if existing is None:
                return None
            updated = existing.copy(**changes)
            self._submissions[submission_id] = updated
            return updated.copy()

    def delete(self, submission_id):
        with self._lock:
            return self._submissions.pop(submission_id, None) is not None

    def counts(self, field=None):
        field = field or self.filter_field
        with self._lock:
            tally = Counter(getattr(s, field, None) for s in self._submissions.values())
            total = len(self._submissions)
        result = {k: v for k, v in tally.items() if k is not None}
        result[self.all_sentinel] = total
        return result

    def __len__(self):
        with self._lock:
            return len(self._submissions)

    # ------------------------------------------------------------
    # Users
    # ------------------------------------------------------------
    def create_user(self, username, password):
        user = User(username=username, password=password)
        with self._lock:
            self._users[user.id] = user
        return user

    def get_user(self, user_id):
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username):
        with self._lock:
            return next(
                (u for u in self._users.values() if u.username == username), None
            )
