# vulnreach

`vulnreach` works out how known vulnerabilities in dependencies reach your code.
Given advisories in the OSV shape and a program's package, module and call
graphs, it keeps the advisories that apply and finds representative evidence
for each finding:

- **import chains**: packages from one of your entry packages down to a
  vulnerable package;
- **call stacks**: calls from one of your entry functions down to a vulnerable
  symbol.

It has no runtime dependencies.

## Installation

```
pip install vulnreach
```

To run the test suite:

```
pip install "vulnreach[test]"
pytest
```

## Advisories

`vulnreach.advisories` holds the advisory records as dataclasses: `Entry`
(with `id`, `affected`, `withdrawn`, `summary`, `details`, `aliases`),
`Affected` (`package`, `ranges`, `imports`), `Range` (`type`, `events`),
`RangeEvent` (`introduced`, `fixed`) and `EcosystemSpecificImport` (`path`,
`goos`, `goarch`, `symbols`).

- `compare_semver(a, b)` returns -1, 0 or 1. It accepts bare versions and
  versions prefixed with `v` or `go`; an invalid version sorts below every valid
  one.
- `affects_semver(ranges, version)` reports whether a version falls inside any
  of the semver ranges. No ranges, a range with no events, or no ranges of the
  semver type, all mean every version is affected. An `introduced` of `"0"`
  opens a range from the start.

## Filtering advisories for a build

`vulnreach.vulns.ModuleVulnerabilities` holds advisories grouped per module as a
list of `ModVulns` (`module`, `vulns`). It can be iterated and has a length.

- `filter(goos, goarch)` returns a new `ModuleVulnerabilities` that drops
  withdrawn advisories, affected entries that name another module, entries for a
  module whose version is unknown (empty), entries whose ranges do not cover the
  module version (the replacement's version when the module is replaced), and
  entries whose imports all belong to other platforms. An empty `goos` or
  `goarch` matches every platform. Every module is kept, possibly with no
  advisories.
- `vulns_for_package(import_path)` returns the advisories of the module whose
  path is the longest prefix of the import path. Standard-library paths (no `.`
  in the first path element) belong to the module named `stdlib`. A replaced
  module is searched under its replacement path. Returns `None` when no module
  matches.
- `vulns_for_symbol(import_path, symbol)` narrows these to advisories whose
  import for that path lists the symbol or lists no symbols at all.

`matches_platform(goos, goarch, imp)` and
`matches_platform_component(value, platforms)` expose the platform check.

`convert(pkgs)` turns loaded package objects into `Package` and `Module`
records. Each input needs `name`, `pkg_path`, `imports` (a sequence, or a
mapping whose values are packages) and `module` (`None`, or an object with
`path`, `version`, `dir` and `replace`). Inputs shared between packages become
shared outputs.

## The result graphs

`vulnreach.model` defines the records the witness search reads:

- `CallGraph` (`functions`, `entries`) of `FuncNode` and `CallSite`, with
  `Position` for source locations;
- `ImportGraph` (`packages`, `entries`) of `PkgNode`;
- `RequireGraph` (`modules`, `entries`) of `ModNode`;
- `Vuln`, linking an advisory to its `call_sink`, `import_sink` and
  `require_sink` ids (0 means unavailable);
- `Result`, holding the graphs, the vulnerabilities and the user modules.

All graphs point from the vulnerable node back towards the entry points.
`str(FuncNode)` gives `RecvType.Name`, or `pkg/path.Name` for plain functions.
`is_std_package(path)` reports whether an import path looks like a
standard-library package.

## Finding witnesses

```python
from vulnreach.model import ImportGraph, PkgNode, Result, Vuln
from vulnreach.witness import import_chains

graph = ImportGraph(
    packages={
        1: PkgNode(id=1, path="example.com/app"),
        2: PkgNode(id=2, path="example.com/lib", imported_by=[1]),
    },
    entries=[1],
)
vuln = Vuln(pkg_path="example.com/lib", import_sink=2)
chains = import_chains(Result(imports=graph, vulns=[vuln]))
print([[pkg.path for pkg in chain] for chain in chains[vuln]])
# [['example.com/app', 'example.com/lib']]
```

`vulnreach.witness.import_chains(res)` and `call_stacks(res)` each return a
dict from every `Vuln` in the result to its witnesses; a vulnerability whose
sink id is 0 gets an empty list. Both run a breadth-first search up from the
vulnerable node and visit each node at most once, so they return representative
chains rather than every possible one. Vulnerabilities with the same import
sink share the same list of chains.

Call stacks are lists of `StackEntry` (`function`, `call`), where `call` is the
call site leading to the next frame and `None` on the last frame. For each
caller only the earliest call site is followed. Stacks are sorted by
`confidence` (number of standard-library frames), then length, then `weight`
(number of unresolved call sites). `stack_less`, `pos_less`, `cs_less` and
`func_less` expose these comparisons.

## What it does not do

`vulnreach` does not load or type-check source code, build call, import or
requires graphs, or fetch advisories from a vulnerability database. You supply
the graphs and advisories; it filters, looks up and explains. There is no
command-line tool.