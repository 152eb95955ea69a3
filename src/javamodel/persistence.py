"""Save and load a registry's sources and classes.

The format is a pickle of a small header dict wrapping the registry.  The
resolver chain and its cache are not part of the saved state; re-attach
resolvers after loading.  Only load files you wrote yourself: unpickling
runs code chosen by the file's author.
"""

from __future__ import annotations

import logging
import os
import pickle
from pathlib import Path
from typing import IO

from javamodel.errors import PersistenceError
from javamodel.registry import Registry

logger = logging.getLogger(__name__)

FORMAT = "javamodel"
VERSION = 1


def save_registry(registry: Registry, target: str | os.PathLike | IO[bytes]) -> None:
    """Write *registry* to a path or binary stream."""
    payload = {"format": FORMAT, "version": VERSION, "registry": registry}
    if hasattr(target, "write"):
        _dump(payload, target)
        return

    path = Path(target)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "wb") as f:
            _dump(payload, f)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise PersistenceError(f"Could not save registry to {path}: {e}") from e
    except PersistenceError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Saved %r to %s", registry, path)


def _dump(payload: dict, stream: IO[bytes]) -> None:
    try:
        pickle.dump(payload, stream, protocol=pickle.HIGHEST_PROTOCOL)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise PersistenceError(f"Could not serialise registry: {e}") from e


def load_registry(source: str | os.PathLike | IO[bytes]) -> Registry:
    """Read a registry written by :func:`save_registry`."""
    try:
        if hasattr(source, "read"):
            payload = pickle.load(source)
        else:
            with open(source, "rb") as f:
                payload = pickle.load(f)
    except OSError as e:
        raise PersistenceError(f"Could not read registry from {source}: {e}") from e
    except (
        pickle.UnpicklingError,
        EOFError,
        AttributeError,
        ImportError,
        IndexError,
        TypeError,
        ValueError,
    ) as e:
        raise PersistenceError(f"Corrupt registry data: {e}") from e

    if not isinstance(payload, dict) or payload.get("format") != FORMAT:
        raise PersistenceError("Not a saved javamodel registry")
    if payload.get("version") != VERSION:
        raise PersistenceError(
            f"Unsupported registry format version {payload.get('version')!r}"
        )
    registry = payload.get("registry")
    if not isinstance(registry, Registry):
        raise PersistenceError("Saved payload does not contain a registry")

    logger.debug("Loaded %r", registry)
    return registry
