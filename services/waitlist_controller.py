"""Waitlist signup form state machine

Owns the email typed into the signup form, validates it, hands it to an
injected async persistence function and tracks the submission lifecycle:

    IDLE -> VALIDATING -> SUBMITTING -> SUCCESS | FAILED

Local validation failures go straight from VALIDATING to FAILED without
touching the persistence function. Editing the email after SUCCESS or
FAILED puts the form back to IDLE.
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from config.settings import SUBMIT_TIMEOUT
from services.waitlist_service import DuplicateEmailError, WaitlistError
from utils.logger import log_debug, log_error, log_warning
from utils.validation import is_valid_email, normalize_email

EMAIL_REQUIRED_MESSAGE = "Email is required"
INVALID_EMAIL_MESSAGE = "Please enter a valid email"
DUPLICATE_EMAIL_MESSAGE = "This email is already on our waitlist"
GENERIC_ERROR_MESSAGE = "Something went wrong, please try again later"
SUCCESS_MESSAGE = "Thank you for joining our waitlist!"

SUBMIT_LABEL = "Join Waitlist"
SUBMITTING_LABEL = "Submitting..."


class SubmissionStatus(str, Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    FAILED = 'failed'


class SubmissionError(str, Enum):
    EMPTY_EMAIL = 'empty_email'
    INVALID_FORMAT = 'invalid_format'
    DUPLICATE_EMAIL = 'duplicate_email'
    GENERIC = 'generic'


@dataclass(frozen=True)
class SubmissionState:
    """Snapshot of the form handed to whatever view renders it"""

    email: str
    status: SubmissionStatus
    error_message: Optional[str] = None
    error_kind: Optional[SubmissionError] = None

    @property
    def message(self) -> Optional[str]:
        if self.status is SubmissionStatus.FAILED:
            return self.error_message
        if self.status is SubmissionStatus.SUCCESS:
            return SUCCESS_MESSAGE
        return None

    @property
    def is_submitting(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTING

    @property
    def submit_label(self) -> str:
        return SUBMITTING_LABEL if self.is_submitting else SUBMIT_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            'email': self.email,
            'status': self.status.value,
            'message': self.message,
            'error': self.error_kind.value if self.error_kind else None,
            'submitting': self.is_submitting,
            'submit_label': self.submit_label,
        }


PersistFunc = Callable[[str], Awaitable[Any]]
Listener = Callable[[SubmissionState], None]


class WaitlistSubmissionController:
    """Validate and submit a waitlist email, one attempt at a time.

    ``persist`` is awaited with the trimmed email. It signals an already
    registered email by raising a ``WaitlistError`` whose ``kind`` is
    "duplicate" (``DuplicateEmailError`` does this); any other exception,
    or running past ``timeout`` seconds, is reported as a generic failure.
    """

    def __init__(self, persist: PersistFunc, timeout: Optional[float] = SUBMIT_TIMEOUT, email: str = ''):
        self._persist = persist
        self.timeout = timeout
        self._email = email
        self._status = SubmissionStatus.IDLE
        self._error_message: Optional[str] = None
        self._error_kind: Optional[SubmissionError] = None
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SubmissionState:
        return SubmissionState(
            email=self._email,
            status=self._status,
            error_message=self._error_message,
            error_kind=self._error_kind,
        )

    @property
    def email(self) -> str:
        return self._email

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def error_kind(self) -> Optional[SubmissionError]:
        return self._error_kind

    @property
    def message(self) -> Optional[str]:
        return self.state.message

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot on every status change"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update_email(self, value: str) -> None:
        self._email = value
        if self._status in (SubmissionStatus.FAILED, SubmissionStatus.SUCCESS):
            # New input invalidates the previous outcome
            self._transition(SubmissionStatus.IDLE)

    async def submit(self) -> SubmissionState:
        if self._status is SubmissionStatus.SUBMITTING:
            log_debug("Waitlist submit ignored, a submission is already in flight")
            return self.state

        self._transition(SubmissionStatus.VALIDATING)

        email = normalize_email(self._email)
        if not email:
            return self._fail(SubmissionError.EMPTY_EMAIL, EMAIL_REQUIRED_MESSAGE)
        if not is_valid_email(email):
            return self._fail(SubmissionError.INVALID_FORMAT, INVALID_EMAIL_MESSAGE)

        self._transition(SubmissionStatus.SUBMITTING)
        try:
            if self.timeout is None:
                await self._persist(email)
            else:
                await asyncio.wait_for(self._persist(email), timeout=self.timeout)
        except WaitlistError as e:
            if e.kind == DuplicateEmailError.kind:
                return self._fail(SubmissionError.DUPLICATE_EMAIL, DUPLICATE_EMAIL_MESSAGE)
            log_error("Waitlist submission error", e)
            return self._fail(SubmissionError.GENERIC, GENERIC_ERROR_MESSAGE)
        except asyncio.TimeoutError:
            log_warning(f"Waitlist submission timed out after {self.timeout}s")
            return self._fail(SubmissionError.GENERIC, GENERIC_ERROR_MESSAGE)
        except asyncio.CancelledError:
            self._transition(SubmissionStatus.IDLE)
            raise
        except Exception as e:
            log_error("Waitlist submission error", e)
            return self._fail(SubmissionError.GENERIC, GENERIC_ERROR_MESSAGE)

        self._transition(SubmissionStatus.SUCCESS)
        return self.state

    def _fail(self, kind: SubmissionError, message: str) -> SubmissionState:
        self._transition(SubmissionStatus.FAILED, kind, message)
        return self.state

    def _transition(self, status: SubmissionStatus, kind: Optional[SubmissionError] = None,
                    message: Optional[str] = None) -> None:
        # error fields are only ever populated alongside FAILED
        self._status = status
        self._error_kind = kind if status is SubmissionStatus.FAILED else None
        self._error_message = message if status is SubmissionStatus.FAILED else None

        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                log_error("Waitlist state listener failed", e)
