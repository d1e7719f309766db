"""Graphs and records describing how vulnerabilities reach user code."""

from __future__ import annotations

from dataclasses import dataclass, field

from vulnreach.advisories import Entry


@dataclass(frozen=True)
class Position:
    """A location in a source file."""

    filename: str = ""
    line: int = 0
    column: int = 0
    offset: int = 0


@dataclass
class Module:
    """A module taking part in the analysis."""

    path: str = ""
    version: str = ""
    dir: str = ""
    replace: Module | None = None


@dataclass(eq=False)
class Package:
    """A package taking part in the analysis."""

    name: str = ""
    pkg_path: str = ""
    imports: list[Package] = field(default_factory=list, repr=False)
    module: Module | None = None


@dataclass
class CallSite:
    """A call made from the function whose id is parent."""

    parent: int = 0
    name: str = ""
    recv_type: str = ""
    pos: Position | None = None
    resolved: bool = False


@dataclass
class FuncNode:
    """A function in the call graph."""

    id: int = 0
    name: str = ""
    recv_type: str = ""
    pkg_path: str = ""
    pos: Position | None = None
    call_sites: list[CallSite] = field(default_factory=list)

    def __str__(self) -> str:
        prefix = self.recv_type or self.pkg_path
        return f"{prefix}.{self.name}"


@dataclass
class CallGraph:
    """Call graph slice directed from vulnerable functions to entry points."""

    functions: dict[int, FuncNode] = field(default_factory=dict)
    entries: list[int] = field(default_factory=list)


@dataclass
class ModNode:
    """A module in the requires graph."""

    id: int = 0
    path: str = ""
    version: str = ""
    replace: int = 0
    required_by: list[int] = field(default_factory=list)


@dataclass
class RequireGraph:
    """Module requires graph slice directed from vulnerable modules to entries."""

    modules: dict[int, ModNode] = field(default_factory=dict)
    entries: list[int] = field(default_factory=list)


@dataclass
class PkgNode:
    """A package in the import graph."""

    id: int = 0
    name: str = ""
    path: str = ""
    module: int = 0
    imported_by: list[int] = field(default_factory=list)
    pkg: Package | None = field(default=None, repr=False, compare=False)


@dataclass
class ImportGraph:
    """Import graph slice directed from vulnerable packages to entries."""

    packages: dict[int, PkgNode] = field(default_factory=dict)
    entries: list[int] = field(default_factory=list)


@dataclass(eq=False)
class Vuln:
    """A detected vulnerability and its sinks in the result graphs.

    A sink id of 0 means the sink is unavailable.
    """

    osv: Entry | None = None
    symbol: str = ""
    pkg_path: str = ""
    mod_path: str = ""
    call_sink: int = 0
    import_sink: int = 0
    require_sink: int = 0


@dataclass
class Result:
    """Reachability of known vulnerabilities in user code."""

    calls: CallGraph | None = None
    imports: ImportGraph | None = None
    requires: RequireGraph | None = None
    vulns: list[Vuln] = field(default_factory=list)
    modules: list[Module] = field(default_factory=list)


def is_std_package(pkg: str) -> bool:
    """Report whether pkg looks like a standard library package path."""
    if not pkg:
        return False
    return "." not in pkg.split("/", 1)[0]