"""
MIT License

Copyright (c) 2024 The-Sycorax (https://github.com/The-Sycorax)

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE+= OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

import logging
import multiprocessing
import queue
import signal

from typing import Any, Callable, Dict, List, Optional

from vanity_gen.config import DEFAULT_CONFIG, SearchConfig
from vanity_gen.search import Failure, SearchRequest, Success, get_vanity_wallet


logger = logging.getLogger(__name__)


class SearchError(RuntimeError):
    """Raised when a search worker reports a failure."""


def handle_message(
    message: Dict[str, Any],
    post: Callable[[Dict[str, Any]], None],
    config: SearchConfig = DEFAULT_CONFIG,
    should_stop: Optional[Callable[[], bool]] = None,
) -> None:
    """
    Runs one search for an inbound request message and posts every outbound message.

    Progress and success messages are posted as dictionaries. Any error ends the
    search and is posted once as {"error": ...}.

    Args:
    message (dict): The request, see SearchRequest.from_dict.
    post (callable): Fire-and-forget outbound channel.
    config (SearchConfig): Search parameters.
    should_stop (callable): Cooperative cancellation check.
    """
    try:
        request = SearchRequest.from_dict(message)
        get_vanity_wallet(request, lambda result: post(result.to_dict()), config, should_stop)
    except Exception as err:
        logger.error("Vanity search failed: %s", err)
        post(Failure(error=str(err)).to_dict())


def _run_worker(message, config, outbox, stop_event):
    # Ctrl+C is handled by the parent, which stops the workers through the event.
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    handle_message(message, outbox.put, config, stop_event.is_set)


class ParallelSearch:
    """
    Runs one independent search per worker process and returns the first match.

    Workers share nothing but the outbound queue and the stop event. Each one
    draws its keys from its own process-local random source.
    """

    def __init__(self, request: SearchRequest, workers: Optional[int] = None, config: SearchConfig = DEFAULT_CONFIG):
        self.request = request
        self.workers = workers or multiprocessing.cpu_count()
        self.config = config
        self.attempts = 0
        self._outbox = multiprocessing.Queue()
        self._stop_event = multiprocessing.Event()
        self._processes: List[multiprocessing.Process] = []

    def _message(self) -> Dict[str, Any]:
        return {
            'pattern': self.request.pattern,
            'caseSensitive': self.request.case_sensitive,
            'useAlternateFormat': self.request.use_alternate_format,
            'matchAtSuffix': self.request.match_at_suffix,
        }

    def start(self):
        for _ in range(self.workers):
            process = multiprocessing.Process(
                target=_run_worker,
                args=(self._message(), self.config, self._outbox, self._stop_event),
                daemon=True,
            )
            process.start()
            self._processes.append(process)
        logger.debug("Started %d search workers", self.workers)

    def stop(self):
        self._stop_event.set()
        for process in self._processes:
            process.join(timeout=1)
            if process.is_alive():
                process.terminate()
                process.join()
        self._processes = []

    def run(self, on_progress: Optional[Callable[[int], None]] = None) -> Success:
        """
        Starts the workers and blocks until one of them finds a match.

        Args:
        on_progress (callable): Called with the total number of attempts after every progress message.

        Returns:
        Success: The first match reported by any worker.
        """
        self.start()
        try:
            while True:
                try:
                    message = self._outbox.get(timeout=0.1)
                except queue.Empty:
                    if not any(process.is_alive() for process in self._processes):
                        raise SearchError("All search workers exited without a result")
                    continue

                if 'error' in message:
                    raise SearchError(message['error'])

                self.attempts += message['attempts']
                if 'address' in message:
                    return Success(message['address'], message['privateKey'], message['attempts'])
                if on_progress is not None:
                    on_progress(self.attempts)
        finally:
            self.stop()
