"""Resolve binary classes by reading ``javap`` signature listings."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Any, Iterable, Iterator

from javamodel.model import JavaClass
from javamodel.resolvers.base import class_from_entry

logger = logging.getLogger(__name__)

# Header of a javap listing, after generic arguments are stripped:
#   public abstract class java.util.AbstractList extends java.util.AbstractCollection implements java.util.List {
_HEADER_RE = re.compile(
    r"^(?P<mods>(?:[\w-]+\s+)*?)"
    r"(?P<kind>class|interface|enum|@interface)\s+(?P<name>[\w.$]+)"
    r"(?:\s+extends\s+(?P<extends>[\w.$,\s]+?))?"
    r"(?:\s+implements\s+(?P<implements>[\w.$,\s]+?))?"
    r"(?:\s+permits\s+[\w.$,\s]+?)?"
    r"\s*\{\s*$"
)

_MODIFIERS = {
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "synchronized",
    "native",
    "transient",
    "volatile",
    "strictfp",
    "default",
    "sealed",
    "non-sealed",
}


class JavapResolver:
    """Introspect compiled classes with the JDK ``javap`` tool.

    *classpath* entries (directories or jars) are passed via ``-cp``; with an
    empty classpath only the JDK's own classes are visible.
    """

    def __init__(self, classpath: Iterable[str | os.PathLike] = (), javap: str | None = None) -> None:
        self.classpath = [str(Path(p)) for p in classpath]
        self._javap = javap
        self._warned = False

    def _javap_path(self) -> str | None:
        path = self._javap or shutil.which("javap")
        if path is None and not self._warned:
            logger.warning("javap not found on PATH — binary classes will not be resolved")
            self._warned = True
        return path

    def resolve(self, fqn: str) -> JavaClass | None:
        javap_path = self._javap_path()
        if javap_path is None:
            return None
        for binary_name in _binary_names(fqn):
            output = self._run(javap_path, binary_name)
            if output is None:
                continue
            entry = parse_javap_output(output)
            if entry is not None:
                return class_from_entry(fqn, entry, origin="resolver:javap")
        return None

    def _run(self, javap_path: str, binary_name: str) -> str | None:
        cmd = [javap_path, "-public"]
        if self.classpath:
            cmd += ["-cp", os.pathsep.join(self.classpath)]
        cmd.append(binary_name)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            logger.warning("Could not run javap: %s", e)
            return None
        if result.returncode != 0:
            logger.debug("javap %s failed: %s", binary_name, result.stderr.strip())
            return None
        return result.stdout


def _binary_names(fqn: str) -> Iterator[str]:
    """``a.B.C`` -> ``a.B.C``, then ``a.B$C`` for nested classes."""
    name = fqn
    yield name
    while True:
        head, dot, tail = name.rpartition(".")
        if not dot or not head.rpartition(".")[2][:1].isupper():
            return
        name = f"{head}${tail}"
        yield name


def _strip_generics(text: str) -> str:
    out: list[str] = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(depth - 1, 0)
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def _java_name(name: str) -> str:
    return name.strip().replace("$", ".")


def _names(text: str | None) -> list[str]:
    if not text:
        return []
    return [_java_name(n) for n in text.split(",") if n.strip()]


def parse_javap_output(output: str) -> dict[str, Any] | None:
    """Convert ``javap -public`` output into a catalog entry, or None."""
    entry: dict[str, Any] | None = None
    class_name = ""
    for raw in output.splitlines():
        line = _strip_generics(raw).strip()
        if not line or line.startswith("Compiled from"):
            continue
        if entry is None:
            m = _HEADER_RE.match(line)
            if m is None:
                continue
            kind = {"@interface": "annotation"}.get(m.group("kind"), m.group("kind"))
            modifiers = [t for t in m.group("mods").split() if t in _MODIFIERS]
            class_name = _java_name(m.group("name"))
            entry = {"kind": kind, "modifiers": modifiers, "fields": [], "methods": []}
            extends = _names(m.group("extends"))
            implements = _names(m.group("implements"))
            if kind in ("interface", "annotation"):
                entry["interfaces"] = extends + implements
            else:
                if extends and extends[0] != "java.lang.Object":
                    entry["superclass"] = extends[0]
                entry["interfaces"] = implements
            continue
        if line == "}":
            break
        if not line.endswith(";"):
            continue
        member = _parse_member(line[:-1], class_name)
        if member is None:
            continue
        section, data = member
        entry[section].append(data)
    return entry


def _parse_member(line: str, class_name: str) -> tuple[str, dict[str, Any]] | None:
    line = re.sub(r"\s+throws\s+.*$", "", line)
    if "(" in line:
        head, _, rest = line.partition("(")
        params_text = rest.rpartition(")")[0]
        tokens = head.split()
        if not tokens:
            return None
        name = _java_name(tokens[-1])
        modifiers = [t for t in tokens[:-1] if t in _MODIFIERS]
        others = [t for t in tokens[:-1] if t not in _MODIFIERS]
        params = [_java_name(p) for p in params_text.split(",") if p.strip()]
        if name == class_name:
            return "methods", {
                "name": class_name.rpartition(".")[2],
                "constructor": True,
                "params": params,
                "modifiers": modifiers,
            }
        return "methods", {
            "name": name,
            "returns": _java_name(others[-1]) if others else "void",
            "params": params,
            "modifiers": modifiers,
        }
    tokens = line.split()
    if len(tokens) < 2 or (tokens[0] == "static" and tokens[1] == "{}"):
        return None
    modifiers = [t for t in tokens[:-2] if t in _MODIFIERS]
    return "fields", {"name": tokens[-1], "type": _java_name(tokens[-2]), "modifiers": modifiers}
