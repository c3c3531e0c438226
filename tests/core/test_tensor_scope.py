"""
Tests for TensorScope release discipline.
"""

import numpy as np
import pytest

from ort_pipelines_lite.core.session import OrtSession
from ort_pipelines_lite.core.tensor_scope import TensorScope
from ort_pipelines_lite.errors import ResourceReleaseError, TensorConstructionError
from tests.utils.fake_session import FakeInferenceSession


class RecordingSession:
    """Adapter recording create/release calls, optionally failing releases."""

    def __init__(self, fail_release_of=(), fail_create=False):
        self.created = []
        self.released = []
        self.fail_release_of = set(fail_release_of)
        self.fail_create = fail_create

    def create_tensor(self, array):
        if self.fail_create:
            raise MemoryError("out of memory")
        handle = len(self.created)
        self.created.append(handle)
        return handle

    def release_tensor(self, handle):
        self.released.append(handle)
        if handle in self.fail_release_of:
            raise RuntimeError(f"cannot release {handle}")


@pytest.mark.unit
def test_scope_releases_in_reverse_order():
    """Test every handle is released, most recent first."""
    session = RecordingSession()
    array = np.zeros((1, 1), dtype=np.int64)

    with TensorScope(session) as scope:
        scope.create(array)
        scope.create(array)
        scope.create(array)

    assert session.released == [2, 1, 0]
    assert scope.handles == []


@pytest.mark.unit
def test_scope_releases_on_error():
    """Test handles are released when the body raises."""
    session = OrtSession(FakeInferenceSession())

    with pytest.raises(KeyError):
        with TensorScope(session) as scope:
            scope.create(np.zeros((2, 2), dtype=np.int64))
            raise KeyError("boom")

    assert session.live_tensors == 0


@pytest.mark.unit
def test_scope_attempts_every_release():
    """Test a failing release does not stop the others and is raised."""
    session = RecordingSession(fail_release_of={1})
    array = np.zeros((1, 1), dtype=np.int64)

    with pytest.raises(ResourceReleaseError) as exc_info:
        with TensorScope(session) as scope:
            scope.create(array)
            scope.create(array)
            scope.create(array)

    assert session.released == [2, 1, 0]
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.stage == "release"


@pytest.mark.unit
def test_scope_wraps_creation_failures():
    """Test creation failures become TensorConstructionError."""
    session = RecordingSession(fail_create=True)

    with pytest.raises(TensorConstructionError) as exc_info:
        with TensorScope(session) as scope:
            scope.create(np.zeros((3, 4), dtype=np.int64))

    assert "(3, 4)" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, MemoryError)
    assert session.released == []
