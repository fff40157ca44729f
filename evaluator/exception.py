__all__ = (
    'ProblemNotFoundError',
    'WorkspaceError',
)


class ProblemNotFoundError(Exception):
    """Raised when a problem id does not exist in the catalog."""

    def __init__(self, problem_id):
        super().__init__(f'problem {problem_id} not found')
        self.problem_id = problem_id


class WorkspaceError(Exception):
    pass
