# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-process supervisor coordinating debounced cppcheck runs.

:class:`CheckRunner` lives on one asyncio event loop. Callers enqueue files
at any time; the runner coalesces them behind a short debounce delay,
starts at most one analysis process, streams its output into typed events
and re-checks the queue whenever a process exits. A request that exactly
matches the running batch kills the process so it restarts with fresh
content once the exit has been handled.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Final, TypeVar

from .arguments import (
    build_run_arguments,
    custom_arguments,
    find_enable_override,
    include_arguments,
    render_command,
)
from .command_size import ArgumentListFiles, fit_invocation, max_command_length
from .errors import ListFileError
from .file_queue import FileQueue
from .macros import MacroExpander, VariableMacroExpander
from .messages import MemoryMessageSink, MessageLevel, MessageSink
from .models import FAILED_TO_START_CODE, CheckDiagnostic, CheckTrigger, RunBatch, RunExit, RunnerState
from .parsers import OutputParser, decode_line
from .progress import PROGRESS_TITLE, NullProgressSink, ProgressSink, RunProgress
from .settings import RunnerSettings

LOGGER = logging.getLogger(__name__)

CHECK_DELAY_SECONDS: Final[float] = 0.2
STREAM_LIMIT: Final[int] = 1024 * 1024

MSG_STARTING: Final[str] = "Starting cppcheck with: {command}"
MSG_STARTED: Final[str] = "cppcheck started"
MSG_ERROR: Final[str] = "cppcheck error occurred"
MSG_FINISHED: Final[str] = "cppcheck finished"
MSG_LIST_FILES_FAILED: Final[str] = "Failed to write cppcheck's argument files"
MSG_OUTPUT_FAILED: Final[str] = "Failed to process cppcheck output; the run was stopped"
MSG_POPUP: Final[str] = "cppcheck: {file}:{line}: {message}"

ProcessFactory = Callable[..., Awaitable[asyncio.subprocess.Process]]
_ArgT = TypeVar("_ArgT")


@dataclass(slots=True)
class RunnerHooks:
    """Optional callbacks notified as runs progress."""

    started_checking: Callable[[RunBatch], None] | None = None
    progress: Callable[[int], None] | None = None
    diagnostic: Callable[[CheckDiagnostic], None] | None = None
    run_finished: Callable[[RunExit], None] | None = None


def _emit(callback: Callable[[_ArgT], None] | None, value: _ArgT) -> None:
    if callback is not None:
        callback(value)


async def _read_lines(stream: asyncio.StreamReader | None) -> AsyncIterator[str]:
    """Yield stripped, non-empty lines of ``stream``, skipping lines over the reader limit."""

    if stream is None:
        return
    while True:
        try:
            raw = await stream.readline()
        except ValueError as exc:
            LOGGER.debug("discarding overlong output line: %s", exc)
            continue
        if not raw:
            return
        line = decode_line(raw)
        if line:
            yield line


class CheckRunner:
    """Coordinate repeated cppcheck invocations for a changing set of files."""

    def __init__(
        self,
        settings: RunnerSettings | None = None,
        *,
        hooks: RunnerHooks | None = None,
        messages: MessageSink | None = None,
        progress: ProgressSink | None = None,
        expander: MacroExpander | None = None,
        list_files: ArgumentListFiles | None = None,
        max_length: int | None = None,
        spawn: ProcessFactory | None = None,
        check_delay: float = CHECK_DELAY_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Create an idle runner.

        Args:
            settings: Initial configuration snapshot; defaults apply when omitted.
            hooks: Callbacks receiving run events.
            messages: Sink for log text and user-visible errors.
            progress: Sink creating one progress handle per run.
            expander: Macro expander applied to the custom parameters.
            list_files: Owner of the temporary list files.
            max_length: Command-line limit; probed from the platform when omitted.
            spawn: Process factory compatible with :func:`asyncio.create_subprocess_exec`.
            check_delay: Debounce delay in seconds before the first dispatch.
            loop: Event loop used for timers and tasks; the running loop by default.
        """

        self.hooks = hooks or RunnerHooks()
        self._messages: MessageSink = messages or MemoryMessageSink()
        self._progress_sink: ProgressSink = progress or NullProgressSink()
        self._expander: MacroExpander = expander or VariableMacroExpander()
        self._list_files = list_files or ArgumentListFiles()
        self._max_length = max_length if max_length is not None else max_command_length()
        self._spawn: ProcessFactory = spawn or asyncio.create_subprocess_exec
        self._check_delay = check_delay
        self._loop = loop

        self._settings = RunnerSettings()
        self._run_arguments: list[str] = []
        self._include_flags: list[str] = []
        self._queue = FileQueue()
        self._state = RunnerState.IDLE
        self._current_batch: RunBatch = ()
        self._process: asyncio.subprocess.Process | None = None
        self._run_task: asyncio.Task[None] | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._kill_requested = False
        self._closed = False
        self._progress_handle: RunProgress | None = None
        self._popup_sent = False
        self._idle = asyncio.Event()
        self._idle.set()
        self.configure(settings or RunnerSettings())

    # ------------------------------------------------------------------ state

    @property
    def settings(self) -> RunnerSettings:
        """Return the active configuration snapshot."""

        return self._settings

    @property
    def state(self) -> RunnerState:
        """Return the supervisor state."""

        return self._state

    @property
    def current_batch(self) -> RunBatch:
        """Return the files committed to the most recent dispatch."""

        return self._current_batch

    @property
    def pending(self) -> RunBatch:
        """Return the sorted files waiting for the next dispatch."""

        return self._queue.snapshot()

    @property
    def run_arguments(self) -> tuple[str, ...]:
        """Return the static flags built from the current settings."""

        return tuple(self._run_arguments)

    @property
    def is_running(self) -> bool:
        """Return ``True`` while a process is starting, running or finishing."""

        return self._state is not RunnerState.IDLE

    # ------------------------------------------------------------- public API

    def configure(self, settings: RunnerSettings) -> None:
        """Adopt ``settings`` and rebuild the static arguments.

        The running process, if any, keeps the snapshot it started with.
        """

        self._settings = settings
        self._run_arguments = build_run_arguments(settings)
        LOGGER.debug("static arguments: %s", self._run_arguments)

    def set_include_paths(self, paths: Iterable[str]) -> None:
        """Replace the include paths passed to subsequent runs."""

        self._include_flags = include_arguments(paths)

    def check_files(self, files: Iterable[str]) -> None:
        """Queue ``files`` for checking.

        Args:
            files: Paths to analyse; merged into the pending queue.

        Raises:
            EmptyBatchError: If ``files`` is empty.
        """

        self._queue.enqueue(files)
        if self.is_running:
            if self._queue.matches(self._current_batch):
                LOGGER.debug("queue matches running batch; restarting")
                self._kill()
            return
        if self._timer is None:
            self._timer = self._event_loop().call_later(self._check_delay, self._on_check_delay)
        self._update_idle()

    def request_check(self, trigger: CheckTrigger, files: Iterable[str]) -> bool:
        """Queue ``files`` when the settings enable checks for ``trigger``.

        Returns:
            bool: ``True`` when the files were queued.

        Raises:
            EmptyBatchError: If the trigger is enabled and ``files`` is empty.
        """

        if not self._settings.checks_on(trigger):
            LOGGER.debug("checks on %s are disabled", trigger.value)
            return False
        self.check_files(files)
        return True

    def stop_checking(self) -> None:
        """Drop pending files and kill the active process, if any."""

        self._queue.clear()
        self._cancel_timer()
        self._kill()
        self._update_idle()

    def close(self) -> None:
        """Kill any open process, cancel the debounce timer and remove list files."""

        self._closed = True
        self._cancel_timer()
        self._kill()
        self._list_files.close()
        self._update_idle()

    async def wait_idle(self) -> None:
        """Wait until no run is active and no dispatch is scheduled."""

        await self._idle.wait()

    # ---------------------------------------------------------------- dispatch

    def _event_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _on_check_delay(self) -> None:
        self._timer = None
        self._check_queued_files()
        self._update_idle()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _update_idle(self) -> None:
        if self._state is RunnerState.IDLE and self._timer is None:
            self._idle.set()
        else:
            self._idle.clear()

    def _check_queued_files(self) -> None:
        if self._closed or self.is_running or not self._queue:
            return
        settings = self._settings
        binary = settings.binary_file
        if not binary:
            return

        expanded = self._expander.expand(settings.custom_parameters)
        static = self._run_arguments
        if find_enable_override(expanded) != find_enable_override(settings.custom_parameters):
            # A macro supplied or changed the enable flag.
            static = build_run_arguments(settings, custom_parameters=expanded)
        # Custom parameters go first so they shadow repeated runner flags.
        arguments = [*custom_arguments(expanded), *static]
        includes = [] if settings.ignore_include_paths else list(self._include_flags)
        batch = self._queue.drain()
        self._current_batch = batch
        try:
            invocation = fit_invocation(
                arguments,
                batch,
                includes,
                limit=self._max_length,
                list_files=self._list_files,
            )
        except ListFileError as exc:
            LOGGER.warning("dropping batch of %d files: %s", len(batch), exc)
            self._messages.write(MSG_LIST_FILES_FAILED, level=MessageLevel.ERROR)
            self._current_batch = ()
            return

        self._state = RunnerState.RUNNING
        self._kill_requested = False
        _emit(self.hooks.started_checking, batch)
        if settings.show_binary_output:
            command = render_command(binary, invocation.arguments)
            self._messages.write(MSG_STARTING.format(command=command), level=MessageLevel.FOCUS)
        self._run_task = self._event_loop().create_task(self._run(binary, invocation.arguments, batch, settings))
        self._update_idle()

    # --------------------------------------------------------------- process

    async def _run(
        self,
        binary: str,
        arguments: Sequence[str],
        batch: RunBatch,
        settings: RunnerSettings,
    ) -> None:
        parser = OutputParser(show_id=settings.show_id)
        outcome = RunExit(returncode=FAILED_TO_START_CODE, batch=batch, failed_to_start=True)
        try:
            try:
                process = await self._spawn(
                    binary,
                    *arguments,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    limit=STREAM_LIMIT,
                )
            except OSError as exc:
                LOGGER.debug("failed to start %s: %s", binary, exc)
                if settings.show_binary_output:
                    self._messages.write(MSG_ERROR)
                return

            self._process = process
            outcome = RunExit(returncode=FAILED_TO_START_CODE, batch=batch)
            self._on_started(settings)
            if self._kill_requested:
                self._kill()
            try:
                async with asyncio.TaskGroup() as readers:
                    readers.create_task(self._read_stdout(process.stdout, parser, settings))
                    readers.create_task(self._read_stderr(process.stderr, parser, settings))
            except* Exception as group:
                LOGGER.error("handling cppcheck output failed; stopping the run", exc_info=group)
                self._messages.write(MSG_OUTPUT_FAILED, level=MessageLevel.ERROR)
                self._kill()
            returncode = await process.wait()
            self._state = RunnerState.FINISHING
            if returncode < 0 and settings.show_binary_output:
                self._messages.write(MSG_ERROR)
            outcome = RunExit(returncode=returncode, batch=batch)
        finally:
            self._finish(outcome, settings)

    def _on_started(self, settings: RunnerSettings) -> None:
        if settings.show_binary_output:
            self._messages.write(MSG_STARTED)
        self._popup_sent = False
        self._finish_progress()
        self._progress_handle = self._progress_sink.begin(PROGRESS_TITLE, on_cancel=self.stop_checking)

    async def _read_stdout(
        self,
        stream: asyncio.StreamReader | None,
        parser: OutputParser,
        settings: RunnerSettings,
    ) -> None:
        async for line in _read_lines(stream):
            update = parser.parse_stdout(line)
            if update is not None and self._progress_handle is not None:
                self._progress_handle.update(update.percent)
                _emit(self.hooks.progress, update.percent)
            if settings.show_binary_output:
                self._messages.write(line)

    async def _read_stderr(
        self,
        stream: asyncio.StreamReader | None,
        parser: OutputParser,
        settings: RunnerSettings,
    ) -> None:
        async for line in _read_lines(stream):
            if settings.show_binary_output:
                self._messages.write(line)
            diagnostic = parser.parse_stderr(line)
            if diagnostic is None:
                continue
            _emit(self.hooks.diagnostic, diagnostic)
            if not self._popup_sent and settings.popup_for(diagnostic.severity):
                self._popup_sent = True
                self._messages.write(
                    MSG_POPUP.format(file=diagnostic.file, line=diagnostic.line, message=diagnostic.message),
                    level=MessageLevel.FOCUS,
                )

    def _kill(self) -> None:
        process = self._process
        if process is None:
            if self._state is RunnerState.RUNNING:
                self._kill_requested = True
            return
        if process.returncode is None:
            LOGGER.debug("killing cppcheck process %s", process.pid)
            with contextlib.suppress(ProcessLookupError):
                process.kill()

    def _finish_progress(self) -> None:
        handle = self._progress_handle
        self._progress_handle = None
        if handle is not None and not handle.finished:
            handle.finish()

    def _finish(self, outcome: RunExit, settings: RunnerSettings) -> None:
        self._state = RunnerState.FINISHING
        self._kill()
        self._process = None
        self._kill_requested = False
        self._finish_progress()
        if settings.show_binary_output:
            self._messages.write(MSG_FINISHED)
        LOGGER.debug("run finished: %s", outcome)
        try:
            _emit(self.hooks.run_finished, outcome)
        finally:
            self._state = RunnerState.IDLE
            self._run_task = None
            self._check_queued_files()
            self._update_idle()


__all__ = [
    "CHECK_DELAY_SECONDS",
    "CheckRunner",
    "ProcessFactory",
    "RunnerHooks",
]
