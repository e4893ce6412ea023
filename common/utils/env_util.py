"""
Environment variable loading utility

Supports layered environment variable loading:
1. Load .env (default/base configuration)
2. Load .env.<RUN_ENV> (e.g. .env.test, .env.prod) on top of it
"""
import os
from pathlib import Path

import environ

# run environments with a dedicated override file
KNOWN_RUN_ENVS = ("dev", "test", "prod")


def get_run_env() -> str:
    """
    Current run environment, lower-cased, empty when not set
    """
    return os.environ.get("RUN_ENV", "").strip().lower()


def load_env(base_dir: Path) -> environ.Env:
    """
    Load environment variables with layered support

    Loading order:
    1. Load .env (base/default configuration)
    2. If RUN_ENV is one of KNOWN_RUN_ENVS, load .env.<RUN_ENV> (overrides .env)

    Args:
        base_dir: Base directory where .env files are located

    Returns:
        environ.Env instance with loaded environment variables
    """
    env_file = base_dir / ".env"
    if env_file.exists():
        environ.Env.read_env(env_file)

    run_env = get_run_env()
    if run_env in KNOWN_RUN_ENVS:
        override_file = base_dir / f".env.{run_env}"
        if override_file.exists():
            environ.Env.read_env(override_file, overwrite=True)

    return environ.Env()
