"""Response template rendering.

Placeholders:

- ``${nodeName}`` is replaced by the target node identity.
- ``${argN}`` (N >= 1) is replaced by ``args[N]``. ``args[0]`` is the
  subcommand token and is never substitutable. Out-of-range placeholders are
  left as they are.

All placeholders are resolved in a single pass, so substituted values are
never scanned again.
"""
import re
from typing import Sequence


_PLACEHOLDER = re.compile(r"\$\{(?:(nodeName)|arg([1-9][0-9]*))\}")


def render_response(template: str, node_name: str, args: Sequence[str]) -> str:
    """Render ``template`` for ``node_name`` with the caller's ``args``."""

    def _substitute(match: "re.Match[str]") -> str:
        if match.group(1):
            return node_name
        index = int(match.group(2))
        if index < len(args):
            return args[index]
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template)


__all__ = ["render_response"]
