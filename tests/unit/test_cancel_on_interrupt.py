# ABOUTME: Unit tests for the Ctrl-C handling around `comicmeta extract` batches.
# ABOUTME: Ctrl-C aborts normally until the batch starts iterating, then requests cancellation.

import signal

import pytest

from comicmeta.cli.commands.extract_cmd import cancel_on_interrupt
from comicmeta.core.runner import CancelToken


class TestCancelOnInterrupt:
    def test_interrupt_before_arming_raises(self) -> None:
        token = CancelToken()
        with cancel_on_interrupt(token):
            handler = signal.getsignal(signal.SIGINT)
            with pytest.raises(KeyboardInterrupt):
                handler(signal.SIGINT, None)
        assert token.cancelled is False

    def test_interrupt_after_arming_cancels(self) -> None:
        token = CancelToken()
        with cancel_on_interrupt(token) as arm:
            arm()
            handler = signal.getsignal(signal.SIGINT)
            handler(signal.SIGINT, None)
        assert token.cancelled is True

    def test_previous_handler_restored(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        with cancel_on_interrupt(CancelToken()):
            assert signal.getsignal(signal.SIGINT) is not before
        assert signal.getsignal(signal.SIGINT) is before
