"""Client for the Synology-style NAS file station API.

A session walks UNAUTHENTICATED -> AUTHENTICATED -> UNAUTHENTICATED. No call
raises past this module: every operation reports a ``NasResult``.
"""

import enum
import logging
import os
import threading
from typing import NamedTuple, Optional

import requests

logger = logging.getLogger(__name__)

AUTH_PATH = "/webapi/auth.cgi"
ENTRY_PATH = "/webapi/entry.cgi"
DEFAULT_DESTINATION = "/선납파일"
# FileStation error codes meaning the sid is no longer valid
SESSION_ERROR_CODES = frozenset({106, 107, 119})


def _json_body(res):
    body = res.json()
    if not isinstance(body, dict):
        raise ValueError(f"unexpected NAS response: {body!r}")
    return body


class SessionState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class NasResult(NamedTuple):
    ok: bool
    reason: Optional[str] = None

    def __bool__(self):
        return self.ok


class NasUploadSession:
    def __init__(
        self,
        host,
        port,
        username,
        password,
        *,
        timeout=60,
        verify_ssl=True,
        http=None,
    ):
        self.base_url = f"https://{host}:{port}"
        self.username = username
        self.password = password
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.http = http or requests.Session()
        self.state = SessionState.UNAUTHENTICATED
        self._sid = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config):
        """Build a session from app config, or None when no NAS host is set."""
        if not config.get("NAS_HOST"):
            return None
        return cls(
            config["NAS_HOST"],
            config.get("NAS_PORT", "5001"),
            config.get("NAS_USERNAME", ""),
            config.get("NAS_PASSWORD", ""),
            timeout=config.get("NAS_TIMEOUT", 60),
            verify_ssl=config.get("NAS_VERIFY_SSL", True),
        )

    @property
    def is_authenticated(self):
        return self.state is SessionState.AUTHENTICATED

    def _transition(self, state, sid=None):
        self.state = state
        self._sid = sid if state is SessionState.AUTHENTICATED else None

    def login(self) -> NasResult:
        params = {
            "api": "SYNO.API.Auth",
            "version": "3",
            "method": "login",
            "account": self.username,
            "passwd": self.password,
            "session": "FileStation",
            "format": "cookie",
        }
        with self._lock:
            try:
                res = self.http.get(
                    self.base_url + AUTH_PATH,
                    params=params,
                    timeout=self.timeout,
                    verify=self.verify_ssl,
                )
                body = _json_body(res)
            except (requests.RequestException, ValueError) as e:
                logger.error("NAS login error: %s", e)
                self._transition(SessionState.UNAUTHENTICATED)
                return NasResult(False, f"login error: {e}")

            sid = (body.get("data") or {}).get("sid") if body.get("success") else None
            if not sid:
                logger.error("NAS login failed: %s", body.get("error"))
                self._transition(SessionState.UNAUTHENTICATED)
                return NasResult(False, f"login rejected: {body.get('error')}")

            self._transition(SessionState.AUTHENTICATED, sid)
            logger.info("NAS login succeeded")
            return NasResult(True)

    def upload_file(self, local_path, destination_folder=DEFAULT_DESTINATION) -> NasResult:
        with self._lock:
            if not self.is_authenticated:
                result = self.login()
                if not result.ok:
                    logger.error("NAS upload aborted, login failed")
                    return result

            if not os.path.exists(local_path):
                logger.error("NAS upload source not found: %s", local_path)
                return NasResult(False, f"file not found: {local_path}")

            data = {
                "api": "SYNO.FileStation.Upload",
                "version": "2",
                "method": "upload",
                "path": destination_folder,
                "create_parents": "true",
                "overwrite": "true",
            }
            try:
                with open(local_path, "rb") as fh:
                    res = self.http.post(
                        self.base_url + ENTRY_PATH,
                        params={"_sid": self._sid},
                        data=data,
                        files={"file": (os.path.basename(local_path), fh)},
                        timeout=self.timeout,
                        verify=self.verify_ssl,
                    )
                body = _json_body(res)
            except (requests.RequestException, OSError, ValueError) as e:
                logger.error("NAS upload error: %s", e)
                return NasResult(False, f"upload error: {e}")

            if not body.get("success"):
                logger.error("NAS upload failed: %s", body.get("error"))
                error = body.get("error")
                if isinstance(error, dict) and error.get("code") in SESSION_ERROR_CODES:
                    # next upload logs in again
                    self._transition(SessionState.UNAUTHENTICATED)
                return NasResult(False, f"upload rejected: {body.get('error')}")

            logger.info("NAS upload succeeded: %s", local_path)
            return NasResult(True)

    def logout(self) -> NasResult:
        with self._lock:
            if not self.is_authenticated:
                return NasResult(True)
            params = {
                "api": "SYNO.API.Auth",
                "version": "3",
                "method": "logout",
                "session": "FileStation",
                "_sid": self._sid,
            }
            try:
                self.http.get(
                    self.base_url + AUTH_PATH,
                    params=params,
                    timeout=self.timeout,
                    verify=self.verify_ssl,
                )
            except requests.RequestException as e:
                logger.error("NAS logout error: %s", e)
                return NasResult(False, f"logout error: {e}")
            finally:
                # the sid is not reused after a logout attempt
                self._transition(SessionState.UNAUTHENTICATED)

            logger.info("NAS logout complete")
            return NasResult(True)

    def check_connection(self) -> NasResult:
        with self._lock:
            result = self.login()
            if result.ok:
                self.logout()
            return result
