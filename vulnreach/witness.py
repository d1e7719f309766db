"""Representative import chains and call stacks leading to vulnerabilities."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from vulnreach.model import CallSite, FuncNode, PkgNode, Position, Result, Vuln, is_std_package

ImportChain = list[PkgNode]


@dataclass
class StackEntry:
    """A frame of a call stack.

    call is the call site inducing the next frame, or None for the last frame.
    """

    function: FuncNode
    call: CallSite | None = None


CallStack = list[StackEntry]


def import_chains(res: Result) -> dict[Vuln, list[ImportChain]]:
    """Return representative import chains for each vulnerability in res.

    Chains start at an entry package and end at the vulnerable package.
    Each package is visited at most once during the search, so not every
    chain is reported. Vulnerabilities of the same package share chains.
    """
    per_sink: dict[int, list[Vuln]] = {}
    for vuln in res.vulns:
        per_sink.setdefault(vuln.import_sink, []).append(vuln)

    chains: dict[Vuln, list[ImportChain]] = {}
    for sink, vulns in per_sink.items():
        found = _import_chains(sink, res)
        for vuln in vulns:
            chains[vuln] = found
    return chains


def _import_chains(sink_id: int, res: Result) -> list[ImportChain]:
    if sink_id == 0:
        return []
    graph = res.imports
    entries = set(graph.entries)
    chains: list[ImportChain] = []
    seen: set[int] = set()

    queue: deque[ImportChain] = deque([[graph.packages[sink_id]]])
    while queue:
        chain = queue.popleft()
        pkg = chain[0]
        if pkg.id in seen:
            continue
        seen.add(pkg.id)
        for importer_id in pkg.imported_by:
            importer = graph.packages[importer_id]
            extended = [importer, *chain]
            if importer.id in entries:
                chains.append(list(extended))
            queue.append(extended)
    return chains


def call_stacks(res: Result) -> dict[Vuln, list[CallStack]]:
    """Return representative call stacks for each vulnerability in res.

    Stacks start at an entry function and end at the vulnerable symbol.
    They are ordered by confidence, then length, then number of
    unresolved call sites. Each function is visited at most once.
    """
    return {
        vuln: sorted(_call_stacks(vuln.call_sink, res), key=_stack_key)
        for vuln in res.vulns
    }


def _stack_key(stack: CallStack) -> tuple[int, int, int]:
    return confidence(stack), len(stack), weight(stack)


def _call_stacks(sink_id: int, res: Result) -> list[CallStack]:
    if sink_id == 0:
        return []
    graph = res.calls
    entries = set(graph.entries)
    stacks: list[CallStack] = []
    seen: set[int] = set()

    queue: deque[CallStack] = deque([[StackEntry(graph.functions[sink_id])]])
    while queue:
        stack = queue.popleft()
        func = stack[0].function
        if func.id in seen:
            continue
        seen.add(func.id)
        # One call site per caller suffices since each function is visited once.
        for site in _callsites(func.call_sites, res, seen):
            caller = graph.functions[site.parent]
            extended = [StackEntry(caller, site), *stack]
            if caller.id in entries:
                stacks.append(list(extended))
            queue.append(extended)
    return stacks


def _callsites(sites: list[CallSite], res: Result, visited: set[int]) -> list[CallSite]:
    """Pick the smallest call site for each unvisited caller, ordered by caller."""
    smallest: dict[int, CallSite] = {}
    for site in sites:
        if site.parent in visited:
            continue
        if cs_less(site, smallest.get(site.parent)):
            smallest[site.parent] = site
    callers = sorted((res.calls.functions[pid] for pid in smallest), key=_func_key)
    return [smallest[f.id] for f in callers]


def _func_key(func: FuncNode):
    if func.pos is None:
        return 1, 0, 0, "", str(func), func.id
    return 0, func.pos.line, func.pos.column, func.pos.filename, str(func), func.id


def weight(stack: CallStack) -> int:
    """Number of unresolved call sites in stack."""
    return sum(1 for e in stack if e.call is not None and not e.call.resolved)


def confidence(stack: CallStack) -> int:
    """Number of frames in stack whose function is in a standard library package."""
    return sum(1 for e in stack if is_std_package(e.function.pkg_path))


def stack_less(s1: CallStack, s2: CallStack) -> bool:
    """Order stacks by confidence, length, then weight.

    Stacks equal on all three compare as less.
    """
    c1, c2 = confidence(s1), confidence(s2)
    if c1 != c2:
        return c1 < c2
    if len(s1) != len(s2):
        return len(s1) < len(s2)
    w1, w2 = weight(s1), weight(s2)
    if w1 != w2:
        return w1 < w2
    return True


def cs_less(cs1: CallSite, cs2: CallSite | None) -> bool:
    """Compare call sites by position, falling back to their names."""
    if cs2 is None:
        return True
    p1, p2 = cs1.pos, cs2.pos
    if p1 is not None and p2 is not None:
        if pos_less(p1, p2):
            return True
        if pos_less(p2, p1):
            return False
        return f"{cs1.recv_type}.{cs2.name}" < f"{cs2.recv_type}.{cs2.name}"
    if p2 is None:
        return True
    if p1 is None:
        return False
    return f"{cs1.recv_type}.{cs2.name}" < f"{cs2.recv_type}.{cs2.name}"


def pos_less(p1: Position, p2: Position) -> bool:
    """Compare positions by line, column and then filename."""
    return (p1.line, p1.column, p1.filename) < (p2.line, p2.column, p2.filename)


def func_less(f1: FuncNode, f2: FuncNode) -> bool:
    """Compare functions by position, falling back to their names."""
    p1, p2 = f1.pos, f2.pos
    if p1 is not None and p2 is not None:
        if pos_less(p1, p2):
            return True
        if pos_less(p2, p1):
            return False
        return str(f1) < str(f2)
    if p2 is None:
        return True
    if p1 is None:
        return False
    return str(f1) < str(f2)