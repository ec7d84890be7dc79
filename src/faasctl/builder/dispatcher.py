"""Concurrent build dispatch across a fixed pool of worker threads.

A dispatch starts ``parallel`` workers, then feeds every non-skipped
function of a stack into a shared queue in name order. Each worker pulls
one function at a time and builds it to completion before pulling the
next, so a worker never holds two functions and no function is taken by
two workers. One sentinel per worker closes the queue; the call returns
only after every worker has seen its sentinel and exited.

Build failures never stop the batch. Every function gets a BuildResult and
the caller receives the full DispatchSummary. An interrupt drops whatever is
still queued, lets running builds finish and is then re-raised.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Mapping

from faasctl.builder.executor import build_image, push_image
from faasctl.exceptions import BuildError
from faasctl.lib.output import plain, progress, warning
from faasctl.stack import FunctionDescriptor, FunctionSet

logger = logging.getLogger(__name__)

NO_LANGUAGE_MESSAGE = "Please provide a valid language for your function."

# Marks the end of work for one worker
_CLOSED = object()


@dataclass(frozen=True)
class BuildOptions:
    """Options applied to every build of a dispatch.

    Attributes
    ----------
    no_cache : bool
        Do not use Docker's build cache.
    squash : bool
        Use Docker's squash flag.
    shrinkwrap : bool
        Only write build contexts to ./build/.
    build_args : Mapping[str, str]
        Build arguments from the command line. They override per-function
        build_args from the stack file.
    """

    no_cache: bool = False
    squash: bool = False
    shrinkwrap: bool = False
    build_args: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "build_args", MappingProxyType(dict(self.build_args or {})))


@dataclass
class BuildResult:
    """Outcome of one function in a dispatch."""

    name: str
    ok: bool
    error: str | None = None
    skipped: bool = False
    reason: str | None = None
    worker: int | None = None
    duration: float = 0.0


@dataclass
class DispatchSummary:
    """All results of one dispatch, ordered by function name."""

    results: list[BuildResult] = field(default_factory=list)

    @property
    def built(self) -> list[BuildResult]:
        return [r for r in self.results if r.ok and not r.skipped]

    @property
    def failed(self) -> list[BuildResult]:
        return [r for r in self.results if not r.ok]

    @property
    def skipped(self) -> list[BuildResult]:
        return [r for r in self.results if r.skipped]

    @property
    def ok(self) -> bool:
        return not self.failed

    def names(self) -> list[str]:
        return [r.name for r in self.results]


BuildExecutor = Callable[..., None]
WorkFunction = Callable[[FunctionDescriptor], None]


def dispatch(
    functions: FunctionSet,
    parallel: int,
    options: BuildOptions | None = None,
    executor: BuildExecutor | None = None,
) -> DispatchSummary:
    """Build every non-skipped function using ``parallel`` workers.

    Parameters
    ----------
    functions : FunctionSet
        Functions to build, keyed by name.
    parallel : int
        Number of concurrent workers. Must already be validated as >= 1.
    options : BuildOptions or None, optional
        Options passed unchanged to every build.
    executor : BuildExecutor or None, optional
        Callable with the signature of ``build_image``; defaults to
        ``build_image``. Raises BuildError on failure.

    Returns
    -------
    DispatchSummary
        One result per function, including skipped ones.

    Examples
    --------
    >>> summary = dispatch(stack.functions, parallel=4, options=BuildOptions(no_cache=True))
    >>> if not summary.ok:
    ...     print([r.name for r in summary.failed])
    """
    options = options or BuildOptions()
    executor = executor or build_image

    def build(function: FunctionDescriptor) -> None:
        executor(
            image=function.image,
            handler=function.handler,
            name=function.name,
            language=function.language,
            no_cache=options.no_cache,
            squash=options.squash,
            shrinkwrap=options.shrinkwrap,
            build_args={**function.build_args, **options.build_args},
        )

    return run_pool(functions, parallel, build, action="Building", require_language=True)


def push_all(
    functions: FunctionSet,
    parallel: int,
    pusher: Callable[..., None] | None = None,
) -> DispatchSummary:
    """Push the image of every non-skipped function using ``parallel`` workers.

    Parameters
    ----------
    functions : FunctionSet
        Functions to push, keyed by name.
    parallel : int
        Number of concurrent workers.
    pusher : Callable or None, optional
        Callable taking ``image`` and ``name``; raises BuildError on failure.

    Returns
    -------
    DispatchSummary
        One result per function.
    """
    pusher = pusher or push_image

    def push(function: FunctionDescriptor) -> None:
        pusher(image=function.image, name=function.name)

    return run_pool(
        functions, parallel, push, action="Pushing", require_language=False, skip_label="push"
    )


def run_pool(
    functions: FunctionSet,
    parallel: int,
    work: WorkFunction,
    action: str = "Building",
    require_language: bool = True,
    skip_label: str = "build",
) -> DispatchSummary:
    """Run ``work`` for each non-skipped function on a fixed worker pool.

    On KeyboardInterrupt (or any other error while feeding or waiting) the
    queued functions are discarded, running ones are allowed to finish, and
    the exception is re-raised once every worker has exited.

    Parameters
    ----------
    functions : FunctionSet
        Functions keyed by name. Iterated once, sorted by name.
    parallel : int
        Number of workers, >= 1.
    work : WorkFunction
        Unit of work for one function.
    action : str, optional
        Verb used in progress lines.
    require_language : bool, optional
        Skip functions with an empty language.
    skip_label : str, optional
        Noun used in the "Skipping ... of" line for skip_build functions.

    Returns
    -------
    DispatchSummary
        Results ordered by function name.
    """
    work_queue: queue.Queue = queue.Queue()
    results: list[BuildResult] = []
    results_lock = threading.Lock()

    def record(result: BuildResult) -> None:
        with results_lock:
            results.append(result)

    # Every worker is running before the first put
    workers = []
    for index in range(parallel):
        worker = threading.Thread(
            target=_worker_loop,
            args=(index, work_queue, work, action, require_language, record),
            name=f"worker-{index}",
            daemon=True,
        )
        worker.start()
        workers.append(worker)

    logger.debug("Started %d worker(s) for %d function(s)", parallel, len(functions))

    try:
        for key in sorted(functions):
            function = functions[key]
            if function.name != key:
                function = replace(function, name=key)

            if function.skip_build:
                plain(f"Skipping {skip_label} of: {key}.")
                record(BuildResult(name=key, ok=True, skipped=True, reason="skip_build"))
            else:
                work_queue.put(function)

        for _ in workers:
            work_queue.put(_CLOSED)

        for worker in workers:
            worker.join()
    except BaseException:
        discarded = _drain(work_queue)
        warning(f"Interrupted: {discarded} queued function(s) dropped, waiting for running work")
        for _ in workers:
            work_queue.put(_CLOSED)
        for worker in workers:
            worker.join()
        raise

    logger.debug("All %d worker(s) finished", parallel)
    return DispatchSummary(results=sorted(results, key=lambda r: r.name))


def _drain(work_queue: queue.Queue) -> int:
    """Remove everything still queued; returns the number of functions dropped."""
    dropped = 0
    while True:
        try:
            item = work_queue.get_nowait()
        except queue.Empty:
            return dropped
        if item is not _CLOSED:
            dropped += 1


def _worker_loop(
    index: int,
    work_queue: queue.Queue,
    work: WorkFunction,
    action: str,
    require_language: bool,
    record: Callable[[BuildResult], None],
) -> None:
    while True:
        function = work_queue.get()
        if function is _CLOSED:
            break

        progress(index, f"> {action} {function.name}.")
        started = time.monotonic()

        if require_language and not function.language:
            plain(NO_LANGUAGE_MESSAGE)
            result = BuildResult(
                name=function.name,
                ok=True,
                skipped=True,
                reason="no language",
                worker=index,
            )
        else:
            result = _run_one(index, function, work)

        result.duration = time.monotonic() - started
        record(result)
        progress(index, f"< {action} {function.name} done.")

    progress(index, "worker done.")


def _run_one(index: int, function: FunctionDescriptor, work: WorkFunction) -> BuildResult:
    try:
        work(function)
    except BuildError as e:
        logger.error("%s failed: %s", function.name, e)
        return BuildResult(name=function.name, ok=False, error=str(e), worker=index)
    except Exception as e:
        logger.debug("Unexpected error for %s", function.name, exc_info=True)
        return BuildResult(
            name=function.name,
            ok=False,
            error=f"{type(e).__name__}: {e}",
            worker=index,
        )

    return BuildResult(name=function.name, ok=True, worker=index)
