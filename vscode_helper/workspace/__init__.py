"""Workspace resolution engine.

- **signals**: external readers (window list, ``code --status``, recent store)
- **parsers**: pure title / status / record parsers
- **index**: reconciles signals into a path-unique ``WorkspaceIndex``
- **selector**: picks the active workspace for a caller directory
- **cache**: single-slot TTL cache around the index builder
- **resolver**: public facade used by the CLI and the tool server
"""

from vscode_helper.workspace.resolver import WorkspaceResolver

__all__ = ["WorkspaceResolver"]
