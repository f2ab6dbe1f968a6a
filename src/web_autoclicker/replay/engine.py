"""
Replay Engine - executes an action sequence against a document.

Actions run strictly in order on one asyncio task. pause() takes effect
between actions. stop() is also honoured before each resolver call; once an
action has resolved its element it always finishes (or times out).
Per-action failures are collected in the result and never raised out of
replay(); only stop_on_error ends a job early because of one.

Events (payloads are plain dicts):
    started, progress, action-completed, action-failed,
    paused, resumed, complete, stopped, error

Example:
    >>> engine = ReplayEngine(PlaywrightDocument(page))
    >>> engine.on("progress", lambda p: print(f"{p['current']}/{p['total']}"))
    >>> result = await engine.replay(actions, {"speed": 2})
    >>> print(result.completed, result.failed)
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union
import asyncio
import logging
import time

from web_autoclicker.actions.models import Action, ActionType, ScrollDirection
from web_autoclicker.actions.validation import validate_sequence
from web_autoclicker.config.settings import ReplaySettings
from web_autoclicker.exceptions import (
    ActionExecutionError,
    ActionTimeoutError,
    ElementNotFoundError,
    ElementNotInteractableError,
    ReplayError,
    ReplayStateError,
)
from web_autoclicker.interfaces.document import IDocument, IElement
from web_autoclicker.replay.options import ReplayOptions, parse_options
from web_autoclicker.replay.state import CancellationToken, ReplayStatus, can_transition
from web_autoclicker.resolver.resolver import ElementResolver
from web_autoclicker.utils.events import EventEmitter
from web_autoclicker.utils.retry import RetryConfig, retry_async

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]

# Values of a select action that mean "leave the box unticked"
UNCHECKED_VALUES = frozenset({"unchecked", "false", "off", "0", "no"})


@dataclass
class ActionFailure:
    """
    One failed action.

    Attributes:
        index: Position in the sequence
        action: The action that failed
        error: Error message
        error_type: resolution, interaction, timeout or execution
        attempts: Dispatch attempts made (0 when the target never resolved)
    """
    index: int
    action: Action
    error: str
    error_type: str
    attempts: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "action": self.action.to_dict(),
            "error": self.error,
            "error_type": self.error_type,
            "attempts": self.attempts,
        }


@dataclass
class ReplayProgress:
    """Snapshot of a job's progress."""
    current: int
    total: int
    status: ReplayStatus
    completed: int = 0
    failed: int = 0
    speed: float = 1.0
    duration_ms: int = 0

    @property
    def percentage(self) -> int:
        return round(self.current / self.total * 100) if self.total else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "total": self.total,
            "percentage": self.percentage,
            "status": self.status.value,
            "completed": self.completed,
            "failed": self.failed,
            "speed": self.speed,
            "duration_ms": self.duration_ms,
        }


@dataclass
class ReplayResult:
    """Terminal summary of a replay job."""
    status: ReplayStatus
    completed: int
    failed: int
    total: int
    errors: List[ActionFailure] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.status == ReplayStatus.COMPLETE and self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "completed": self.completed,
            "failed": self.failed,
            "total": self.total,
            "errors": [e.to_dict() for e in self.errors],
            "duration_ms": self.duration_ms,
        }


@dataclass
class ReplayJob:
    """State of one replay() invocation."""
    actions: List[Action]
    options: ReplayOptions
    token: CancellationToken = field(default_factory=CancellationToken)
    current: int = 0
    completed: int = 0
    failed: int = 0
    errors: List[ActionFailure] = field(default_factory=list)
    started_at: float = 0.0


@dataclass
class _Attempts:
    count: int = 0


class _Cancelled(Exception):
    """Raised inside an action when a stop arrives before a resolver call."""


def scroll_delta(action: Action) -> Tuple[float, float]:
    """(dx, dy) for a scroll action, defaulting to downwards."""
    pixels = action.scroll_pixels
    direction = action.direction or ScrollDirection.DOWN
    if direction == ScrollDirection.UP:
        return 0, -pixels
    if direction == ScrollDirection.LEFT:
        return -pixels, 0
    if direction == ScrollDirection.RIGHT:
        return pixels, 0
    return 0, pixels


class ReplayEngine:
    """
    Replays action sequences with pacing, retries and progress events.

    One engine runs one job at a time. The resolver (and its cache) is
    owned by the engine unless one is passed in.
    """

    def __init__(
        self,
        document: IDocument,
        resolver: Optional[ElementResolver] = None,
        settings: Optional[ReplaySettings] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the engine.

        Args:
            document: Document actions are executed against
            resolver: Element resolver (a private one is created if omitted)
            settings: Pacing, retry and limit settings
            sleep: Awaitable sleep in seconds (all pacing goes through it)
            clock: Monotonic clock in seconds
        """
        self.document = document
        self.resolver = resolver or ElementResolver(document)
        self.settings = settings or ReplaySettings()
        self._sleep = sleep
        self._clock = clock
        self._events = EventEmitter()
        self._status = ReplayStatus.IDLE
        self._job: Optional[ReplayJob] = None

    @property
    def status(self) -> ReplayStatus:
        return self._status

    def on(self, event: str, listener: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        return self._events.on(event, listener)

    def off(self, event: str, listener: Callable[[Dict[str, Any]], None]) -> None:
        self._events.off(event, listener)

    def _transition(self, target: ReplayStatus) -> bool:
        if not can_transition(self._status, target):
            logger.debug(f"Ignored transition {self._status.value} -> {target.value}")
            return False
        logger.debug(f"Replay {self._status.value} -> {target.value}")
        self._status = target
        return True

    # Control

    def pause(self) -> bool:
        """Pause before the next action. No-op unless running."""
        if self._job is None or not self._transition(ReplayStatus.PAUSED):
            return False
        self._job.token.pause()
        logger.info("Replay paused")
        self._events.emit("paused", self.get_progress().to_dict())
        return True

    def resume(self) -> bool:
        """Resume a paused job. No-op unless paused."""
        if self._job is None or self._status != ReplayStatus.PAUSED:
            return False
        self._transition(ReplayStatus.RUNNING)
        self._job.token.resume()
        logger.info("Replay resumed")
        self._events.emit("resumed", self.get_progress().to_dict())
        return True

    def stop(self) -> bool:
        """Stop after the in-flight action. No-op unless running or paused."""
        if self._job is None or not self._status.is_active:
            return False
        if not self._job.token.stopped:
            self._job.token.stop()
            logger.info("Replay stop requested")
        return True

    def reset(self) -> None:
        """Return a finished engine to idle."""
        if self._status.is_terminal:
            self._transition(ReplayStatus.IDLE)

    def get_progress(self) -> ReplayProgress:
        """Progress of the current (or last) job."""
        job = self._job
        if job is None:
            return ReplayProgress(current=0, total=0, status=self._status)
        return ReplayProgress(
            current=job.current,
            total=len(job.actions),
            status=self._status,
            completed=job.completed,
            failed=job.failed,
            speed=job.options.speed,
            duration_ms=int((self._clock() - job.started_at) * 1000),
        )

    # Execution

    async def replay(
        self,
        actions: Sequence[Union[Action, Mapping[str, Any]]],
        options: Optional[Union[ReplayOptions, Mapping[str, Any]]] = None,
    ) -> ReplayResult:
        """
        Replay an action sequence.

        Options and actions are validated before anything runs or any
        event is emitted.

        Args:
            actions: Actions or their dict form
            options: ReplayOptions or a mapping (speed, timeout_ms,
                stop_on_error, retry_count); unset values come from settings

        Returns:
            ReplayResult with counts and collected failures

        Raises:
            ReplayStateError: a job is already active on this engine
            ReplayOptionsError: invalid options
            ActionValidationError: invalid action sequence
            ReplayError: unexpected engine fault (job status becomes failed)
        """
        if self._status.is_active:
            raise ReplayStateError("A replay is already in progress on this engine")

        job_options = parse_options(options, defaults=self.settings)
        sequence = validate_sequence(actions, max_length=self.settings.max_actions, allow_empty=False)

        self.reset()
        job = ReplayJob(actions=sequence, options=job_options, started_at=self._clock())
        self._job = job
        self._transition(ReplayStatus.RUNNING)

        logger.info(f"Replaying {len(sequence)} actions at {job_options.speed}x")
        self._events.emit("started", {"total": len(sequence), "speed": job_options.speed})

        try:
            abort = await self._run(job)
        except Exception as e:
            self._transition(ReplayStatus.FAILED)
            logger.error(f"Replay aborted by an engine fault: {e}")
            self._events.emit("error", {**self._summary(job), "error": str(e)})
            raise ReplayError(f"Replay aborted: {e}") from e

        if abort is not None:
            self._transition(ReplayStatus.FAILED)
            logger.warning(f"Replay stopped on error at action {abort.index}: {abort.error}")
            self._events.emit("error", {**self._summary(job), "error": abort.error})
        elif job.token.stopped and job.current < len(job.actions):
            self._transition(ReplayStatus.STOPPED)
            logger.info(f"Replay stopped after {job.current} of {len(job.actions)} actions")
            self._events.emit("stopped", self._summary(job))
        else:
            self._transition(ReplayStatus.COMPLETE)
            logger.info(f"Replay complete: {job.completed} completed, {job.failed} failed")
            self._events.emit("complete", self._summary(job))

        return ReplayResult(
            status=self._status,
            completed=job.completed,
            failed=job.failed,
            total=len(job.actions),
            errors=list(job.errors),
            duration_ms=int((self._clock() - job.started_at) * 1000),
        )

    def _summary(self, job: ReplayJob) -> Dict[str, Any]:
        return {
            "completed": job.completed,
            "failed": job.failed,
            "total": len(job.actions),
            "errors": [e.to_dict() for e in job.errors],
            "duration_ms": int((self._clock() - job.started_at) * 1000),
        }

    async def _run(self, job: ReplayJob) -> Optional[ActionFailure]:
        """Execute the job; returns the failure that aborted it, if any."""
        total = len(job.actions)

        for index, action in enumerate(job.actions):
            while job.token.paused:
                await self._sleep(self.settings.pause_poll_ms / 1000)
            if job.token.stopped:
                break

            try:
                failure = await self._execute(index, action, job.options)
            except _Cancelled:
                logger.debug(f"Action {index} abandoned before resolving: stop requested")
                break
            job.current = index + 1
            progress = self.get_progress()
            step = {
                "index": index,
                "action": action.to_dict(),
                "current": progress.current,
                "total": total,
                "percentage": progress.percentage,
            }

            if failure is None:
                job.completed += 1
                self._events.emit("action-completed", step)
            else:
                job.failed += 1
                job.errors.append(failure)
                logger.warning(f"Action {index} ({action.describe()}) failed: {failure.error}")
                self._events.emit("action-failed", {
                    **step,
                    "error": failure.error,
                    "error_type": failure.error_type,
                    "attempts": failure.attempts,
                })

            self._events.emit("progress", {
                "current": progress.current,
                "total": total,
                "percentage": progress.percentage,
                "status": self._status.value,
            })

            if failure is not None and job.options.stop_on_error:
                return failure

        return None

    async def _execute(self, index: int, action: Action, options: ReplayOptions) -> Optional[ActionFailure]:
        attempts = _Attempts()
        timeout = options.timeout_ms / 1000
        if action.type == ActionType.WAIT:
            # The bound covers the work around a wait, not the requested pause
            timeout += action.wait_ms / 1000 / options.speed
        try:
            await asyncio.wait_for(
                self._perform(action, options, attempts),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            error = ActionTimeoutError(
                f"Action timed out after {options.timeout_ms}ms",
                action_type=action.type.value,
                timeout_ms=options.timeout_ms,
            )
            return ActionFailure(index, action, error.message, "timeout", attempts.count)
        except ElementNotFoundError as e:
            return ActionFailure(index, action, e.message, "resolution", attempts.count)
        except ElementNotInteractableError as e:
            return ActionFailure(index, action, e.message, "interaction", attempts.count)
        except ActionExecutionError as e:
            return ActionFailure(index, action, e.message, "execution", attempts.count)
        return None

    async def _pace(self, ms: float, speed: float) -> None:
        if ms > 0:
            await self._sleep(ms / 1000 / speed)

    async def _perform(self, action: Action, options: ReplayOptions, attempts: _Attempts) -> None:
        speed = options.speed

        if action.type == ActionType.WAIT:
            attempts.count += 1
            await self._pace(action.wait_ms, speed)
            return

        if action.type == ActionType.SCROLL:
            attempts.count += 1
            await self._pace(self.settings.settle_before_ms, speed)
            dx, dy = scroll_delta(action)
            await self.document.scroll_by(dx, dy)
            await self._pace(self.settings.settle_after_ms, speed)
            return

        element = await self._resolve(action)
        if action.type in (ActionType.INPUT, ActionType.SELECT):
            element = await self._form_control(element)

        if not await element.is_visible():
            await element.scroll_into_view()
            await self._pace(self.settings.visibility_wait_ms, speed)

        await self._pace(self.settings.settle_before_ms, speed)

        retry_config = RetryConfig(
            max_attempts=options.retry_count + 1,
            initial_delay_ms=self.settings.retry_delay_ms / speed,
            backoff_multiplier=self.settings.backoff_multiplier,
            retry_on=(ElementNotInteractableError,),
        )
        await retry_async(self._dispatch, retry_config, action, element, attempts, sleep=self._sleep)

        await self._pace(self.settings.settle_after_ms, speed)

    def _check_cancelled(self) -> None:
        if self._job is not None and self._job.token.stopped:
            raise _Cancelled()

    async def _resolve(self, action: Action) -> IElement:
        self._check_cancelled()
        target = await self.resolver.resolve(action.target or "")
        if not target.is_resolved and action.selector and action.selector != action.target:
            self._check_cancelled()
            logger.debug(f"{action.target!r} not found, trying recorded selector {action.selector!r}")
            target = await self.resolver.resolve(action.selector)
        if not target.is_resolved:
            raise ElementNotFoundError(
                f"No element matches {action.target!r}", descriptor=action.target or ""
            )
        return target.element

    async def _form_control(self, element: IElement) -> IElement:
        # Fields are recorded by their label text, which resolves to the <label> itself
        info = await element.info()
        if info.tag_name != "label":
            return element
        controls = await self.document.find_by_label(info.text)
        return controls[0] if controls else element

    async def _dispatch(self, action: Action, element: IElement, attempts: _Attempts) -> None:
        attempts.count += 1

        if action.type == ActionType.CLICK:
            await element.click()
        elif action.type == ActionType.DOUBLE_CLICK:
            await element.double_click()
        elif action.type == ActionType.RIGHT_CLICK:
            await element.right_click()
        elif action.type == ActionType.HOVER:
            await element.hover()
        elif action.type == ActionType.INPUT:
            await element.focus()
            await element.fill("" if action.value is None else str(action.value))
        elif action.type == ActionType.SELECT:
            await self._select(action, element)
        else:
            raise ActionExecutionError(
                f"Unsupported action type: {action.type.value}", action_type=action.type.value
            )

    async def _select(self, action: Action, element: IElement) -> None:
        info = await element.info()
        if info.is_toggle:
            checked = action.value is None or str(action.value).strip().lower() not in UNCHECKED_VALUES
            await element.set_checked(checked)
            return

        if action.value is None:
            raise ActionExecutionError(
                f"select on <{info.tag_name}> needs an option value",
                action_type=action.type.value,
                target=action.target,
            )
        await element.focus()
        await element.select_option(str(action.value))
