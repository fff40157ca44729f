import json
from pathlib import Path
from typing import List, Optional

import requests as rq

from .config import BACKEND_API, BACKEND_TOKEN, PROBLEM_SOURCE
from .exception import ProblemNotFoundError
from .models import Problem
from .utils import logger

CATALOG_PATH = Path(__file__).with_name('problems.json')


def handle_problem_response(resp: rq.Response, problem_id: int):
    if resp.status_code == 404:
        raise ProblemNotFoundError(problem_id)
    if resp.status_code == 401:
        raise PermissionError()
    if not resp.ok:
        logger().error(f'Error during get problem data [resp: {resp.text}]')
        raise RuntimeError(
            f'backend returned {resp.status_code} for problem {problem_id}')


def fetch_problem(problem_id: int) -> Problem:
    """
    Fetch a problem from the backend server
    """
    logger().debug(f'fetch problem [problem_id: {problem_id}]')
    resp = rq.get(
        f'{BACKEND_API}/problem/{problem_id}',
        params={
            'token': BACKEND_TOKEN,
        },
        timeout=10,
    )
    handle_problem_response(resp, problem_id)
    data = resp.json()
    # backend wraps payloads as {"status", "msg", "data"}
    if isinstance(data, dict) and 'data' in data:
        data = data['data']
    return Problem.model_validate(data)


def fetch_problems() -> List[Problem]:
    logger().debug('fetch problem list')
    resp = rq.get(
        f'{BACKEND_API}/problem',
        params={
            'token': BACKEND_TOKEN,
        },
        timeout=10,
    )
    if resp.status_code == 401:
        raise PermissionError()
    if not resp.ok:
        logger().error(f'Error during get problem list [resp: {resp.text}]')
        raise RuntimeError(f'backend returned {resp.status_code}')
    data = resp.json()
    if isinstance(data, dict) and 'data' in data:
        data = data['data']
    return [Problem.model_validate(item) for item in data]


def load_catalog(path: Path = CATALOG_PATH) -> List[Problem]:
    with path.open(encoding='utf-8') as f:
        return [Problem.model_validate(item) for item in json.load(f)]


class ProblemService:
    """
    Look up problems either from the bundled catalog or the backend.
    """

    def __init__(
        self,
        source: Optional[str] = None,
        catalog_path: Path = CATALOG_PATH,
    ):
        self.source = source or PROBLEM_SOURCE
        if self.source not in ('builtin', 'backend'):
            raise ValueError(f'unknown problem source: {self.source}')
        self.problems = (load_catalog(catalog_path)
                         if self.source == 'builtin' else [])

    def get_all_problems(self) -> List[Problem]:
        if self.source == 'backend':
            return fetch_problems()
        return list(self.problems)

    def get_problem(self, problem_id: int) -> Problem:
        if self.source == 'backend':
            return fetch_problem(problem_id)
        for problem in self.problems:
            if problem.id == problem_id:
                return problem
        raise ProblemNotFoundError(problem_id)
