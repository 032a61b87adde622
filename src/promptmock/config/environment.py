"""
Environment Variable Handling.

Loads ``.env`` files with python-dotenv so that ``${VAR}`` references in
configuration files and PROMPTMOCK_* overrides can come from them.
"""

from pathlib import Path

from dotenv import load_dotenv

# Track whether dotenv has been loaded
_dotenv_loaded: bool = False


def ensure_dotenv_loaded(env_file: str = ".env") -> bool:
    """Ensure a .env file is loaded into os.environ.

    Only the first call does any work; later calls return immediately.

    Args:
        env_file: Path to .env file (relative or absolute)

    Returns:
        True if a .env file was found and loaded, False otherwise
    """
    global _dotenv_loaded

    if _dotenv_loaded:
        return True

    _dotenv_loaded = True
    for env_path in (Path(env_file), Path.cwd() / env_file):
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return True
    return False


def reset_environment() -> None:
    """Forget that .env was loaded.

    Useful for testing or reloading after .env changes.
    """
    global _dotenv_loaded
    _dotenv_loaded = False
