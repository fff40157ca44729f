import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from . import config
from .exception import WorkspaceError
from .utils import logger


@dataclass(frozen=True)
class Workspace:
    id: str
    path: Path

    def file(self, name: str) -> Path:
        return self.path / name


def acquire(root: Optional[Path] = None) -> Workspace:
    """
    Create a fresh directory for one evaluation.

    The directory name is a random uuid and `mkdir` is not allowed to reuse
    an existing one, so two evaluations never share a workspace.
    """
    root = Path(root) if root else config.WORKSPACE_ROOT
    workspace_id = uuid.uuid4().hex
    path = root / workspace_id
    try:
        path.mkdir()
    except OSError as e:
        raise WorkspaceError(f'can not create workspace {path}: {e}') from e
    logger().debug(f'acquire workspace [id={workspace_id}]')
    return Workspace(id=workspace_id, path=path)


def release(workspace: Workspace):
    try:
        shutil.rmtree(workspace.path)
    except FileNotFoundError:
        pass
    except Exception as e:
        # must not replace the evaluation outcome
        logger().error(
            f'failed to clean workspace [id={workspace.id}]: {e}',
            exc_info=True,
        )
    else:
        logger().debug(f'release workspace [id={workspace.id}]')


@contextmanager
def allocate(root: Optional[Path] = None) -> Iterator[Workspace]:
    workspace = acquire(root)
    try:
        yield workspace
    finally:
        release(workspace)
