"""
Scoped acquisition of per-call tensor handles.

Every handle created through a TensorScope is released when the scope
exits, whether the call succeeded or raised.
"""

from typing import Any, List

import numpy as np

from ort_pipelines_lite.errors import ResourceReleaseError, TensorConstructionError


class TensorScope:
    """Context manager owning the tensor handles of one call.

    Example:
        with TensorScope(session) as scope:
            ids = scope.create(ids_array)
            session.run({"input_ids": ids}, {"output": scope.create(out)})
    """

    def __init__(self, session: Any) -> None:
        self.session = session
        self.handles: List[Any] = []

    def create(self, array: np.ndarray) -> Any:
        """Create a tensor handle owned by this scope.

        Raises:
            TensorConstructionError: If the session cannot wrap the array.
        """
        try:
            handle = self.session.create_tensor(array)
        except Exception as e:
            raise TensorConstructionError(
                f"Failed to create tensor of shape {tuple(array.shape)}: {e}"
            ) from e
        self.handles.append(handle)
        return handle

    def close(self) -> None:
        """Release every handle, most recent first.

        All releases are attempted before the first failure is raised.

        Raises:
            ResourceReleaseError: If any handle failed to release.
        """
        failures = []
        while self.handles:
            handle = self.handles.pop()
            try:
                self.session.release_tensor(handle)
            except Exception as e:
                failures.append(e)

        if failures:
            raise ResourceReleaseError(
                f"Failed to release {len(failures)} tensor handle(s): {failures[0]}"
            ) from failures[0]

    def __enter__(self) -> "TensorScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
