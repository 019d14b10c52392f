import logging

import pytest

from sha512 import ContextFinishedError, SelfTestError, run_self_test, self_test
from sha512 import selftest


def test_self_test_passes():
    assert self_test() is True


def test_verbose_self_test_logs_each_vector(caplog):
    with caplog.at_level(logging.INFO, logger="sha512.selftest"):
        assert self_test(verbose=True)
    passed = [r.getMessage() for r in caplog.records if r.getMessage().endswith("passed")]
    assert passed == [
        "SHA-384 test 1: passed",
        "SHA-384 test 2: passed",
        "SHA-384 test 3: passed",
        "SHA-512 test 1: passed",
        "SHA-512 test 2: passed",
        "SHA-512 test 3: passed",
    ]


def test_mismatch_returns_false(monkeypatch):
    digests = list(selftest.TEST_DIGESTS)
    bits, expected = digests[0]
    digests[0] = (bits, bytes(len(expected)))
    monkeypatch.setattr(selftest, "TEST_DIGESTS", tuple(digests))
    assert self_test() is False


def test_run_self_test_raises_assertion_error(monkeypatch):
    monkeypatch.setattr(selftest, "self_test", lambda verbose=False: False)
    with pytest.raises(SelfTestError):
        run_self_test()


def test_self_test_error_is_distinct_from_input_errors():
    assert issubclass(SelfTestError, AssertionError)
    assert not issubclass(SelfTestError, (ValueError, TypeError))
    assert not issubclass(ContextFinishedError, AssertionError)
