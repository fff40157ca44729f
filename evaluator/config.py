import json
import os
import tempfile
from pathlib import Path

# problem catalog
PROBLEM_SOURCE = os.getenv(
    'PROBLEM_SOURCE',
    'builtin',
)
BACKEND_API = os.getenv(
    'BACKEND_API',
    'http://web:8080',
)
BACKEND_TOKEN = os.getenv(
    'BACKEND_TOKEN',
    '',
)
# scratch root, every evaluation gets its own sub directory
WORKSPACE_ROOT = Path(
    os.getenv(
        'WORKSPACE_ROOT',
        str(Path(tempfile.gettempdir()) / 'java-assessment'),
    ))
WORKSPACE_ROOT.mkdir(parents=True, exist_ok=True)
LOG_FILE = Path(os.getenv(
    'LOG_FILE',
    'logs/assessment.log',
))
LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
DEBUG = os.getenv('ASSESSMENT_DEBUG', '').lower() == 'true'

_DEFAULT_SANDBOX_CONFIG_PATH = Path(
    os.getenv('SANDBOX_CONFIG', '.config/sandbox.json'))

DEFAULT_SANDBOX_CONFIG = {
    'backend': 'local',
    'javac': 'javac',
    'java': 'java',
    'image': 'eclipse-temurin:17-jdk',
    'docker_url': 'unix://var/run/docker.sock',
    # ms
    'compile_timeout': 20000,
    'run_timeout': 10000,
    # only enforced by the docker backend
    'mem_limit': 262144,  # KB
    'pids_limit': 256,
}

# env name -> (config key, type)
_SANDBOX_ENV_OVERRIDES = {
    'SANDBOX_BACKEND': ('backend', str),
    'JAVAC_PATH': ('javac', str),
    'JAVA_PATH': ('java', str),
    'JAVA_IMAGE': ('image', str),
    'DOCKER_URL': ('docker_url', str),
    'COMPILE_TIMEOUT': ('compile_timeout', int),
    'RUN_TIMEOUT': ('run_timeout', int),
    'MEM_LIMIT': ('mem_limit', int),
    'PIDS_LIMIT': ('pids_limit', int),
    'SANDBOX_ROOT': ('sandbox_root', str),
    'HOST_ROOT': ('host_root', str),
}


def _load_json_config(path: Path) -> dict:
    try:
        with path.open() as f:
            return json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError:
        return {}


def get_sandbox_config(config_path: str | Path | None = None) -> dict:
    path = Path(
        config_path) if config_path else _DEFAULT_SANDBOX_CONFIG_PATH
    cfg = dict(DEFAULT_SANDBOX_CONFIG)
    cfg.update(_load_json_config(path))
    for env_name, (key, cast) in _SANDBOX_ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            cfg[key] = cast(value)
    cfg.setdefault('sandbox_root', str(WORKSPACE_ROOT))
    return cfg
