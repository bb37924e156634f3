"""Write one API reference page per vclock module.

Symbols are grouped by the module that defines them, in ``__all__`` order.
The page lands at ``reference/<module>.md``.
"""

from __future__ import annotations

import inspect

import mkdocs_gen_files

import vclock

TITLES = {
    "clock": "Vector Clock",
    "codec": "Wire Format",
    "config": "Configuration",
    "errors": "Errors",
}


def documented(name: str) -> str | None:
    obj = getattr(vclock, name)
    if not (inspect.isclass(obj) or inspect.isfunction(obj)):
        return None
    return obj.__module__.rpartition(".")[2]


by_module: dict[str, list[str]] = {}
for name in vclock.__all__:
    module = documented(name)
    if module is not None:
        by_module.setdefault(module, []).append(name)

for module, names in sorted(by_module.items()):
    body = "\n".join(f"::: vclock.{name}\n" for name in names)
    with mkdocs_gen_files.open(f"reference/{module}.md", "w") as page:
        page.write(f"# {TITLES.get(module, module.title())}\n\n{body}")
