"""Environment-driven configuration for the Depot CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional
import getpass
import os

from depot.core.depot import Depot
from depot.core.exceptions import InvalidInputError, StorageError

ENV_PATH = "DEPOT_PATH"
ENV_PASS = "DEPOT_PASS"


@dataclass
class AppContext:
    """Container for runtime objects a CLI invocation needs."""

    depot: Depot
    db_path: Path
    env: Mapping[str, str]
    prompt: Callable[[str], str] = getpass.getpass

    def get_password(self) -> str:
        return get_password(self.env, self.prompt)

    def close(self) -> None:
        self.depot.close()


def choose_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Return the location of the database file.

    ``DEPOT_PATH`` wins; otherwise ``$XDG_CONFIG_HOME/depot/depot.db``, then
    ``$HOME/.depot/depot.db``, then ``./.depot/depot.db``. The parent
    directory of the default locations is created.
    """
    env = os.environ if env is None else env

    explicit = env.get(ENV_PATH)
    if explicit:
        return Path(explicit).expanduser()

    if env.get("XDG_CONFIG_HOME"):
        root = Path(env["XDG_CONFIG_HOME"]) / "depot"
    elif env.get("HOME"):
        root = Path(env["HOME"]) / ".depot"
    else:
        root = Path(".") / ".depot"

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot create config directory {root}: {e}") from e
    return root / "depot.db"


def get_password(
    env: Optional[Mapping[str, str]] = None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> str:
    """Return the password from ``DEPOT_PASS`` or an interactive prompt."""
    env = os.environ if env is None else env

    password = env.get(ENV_PASS)
    if password is None:
        password = prompt("PASSWORD: ").strip()
    if not password:
        raise InvalidInputError("password must not be empty")
    return password


def build_context(
    env: Optional[Mapping[str, str]] = None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> AppContext:
    """Resolve configuration and open the depot."""
    env = os.environ if env is None else env
    db_path = choose_path(env)
    return AppContext(depot=Depot(db_path), db_path=db_path, env=env, prompt=prompt)
