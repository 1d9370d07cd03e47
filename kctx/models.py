from dataclasses import dataclass
from typing import List

from kctx.utils.utils import squeeze

MARKER = "*"


@dataclass(frozen=True)
class Context:
    """A kubectl context as listed by `kubectl config get-contexts`"""
    name: str
    namespace: str = ""
    selected: bool = False  # True for the currently active context

    @classmethod
    def from_line(cls, line: str):
        """Create a context from one line of listing output.

        Columns are `[*] name cluster authinfo [namespace]`. Lines that do not
        fit that layout still produce a record; missing columns stay empty.
        """
        line = squeeze(line)
        selected = line.startswith(MARKER)
        if selected:
            line = line.strip(MARKER).strip()

        fields = line.split(" ")
        namespace = fields[3] if len(fields) >= 4 else ""
        return cls(name=fields[0], namespace=namespace, selected=selected)


def parse_line(line: str) -> Context:
    """Parse a single listing line into a Context"""
    return Context.from_line(line)


def parse_contexts(output: str) -> List[Context]:
    """Parse full listing output, skipping blank lines and keeping order"""
    return [parse_line(line) for line in output.split("\n") if line.strip()]
