"""Error types raised by crategraph."""


class CrateGraphError(Exception):
    """Base class for crategraph errors."""


class GraphInvariantError(CrateGraphError):
    """The graph provider handed out an inconsistent snapshot.

    Raised when a crate's root file has no source root, or a source root id
    is unknown. This is a contract violation of the provider and the request
    is abandoned.
    """


class RenderError(CrateGraphError):
    """Rendering the DOT description failed."""


class RendererNotFoundError(RenderError):
    """The external renderer executable could not be started."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"failed to spawn `{executable}`: {reason}")

    @property
    def hint(self) -> str:
        return f"Install Graphviz so that `{self.executable}` is on your PATH"


class RendererIOError(RenderError):
    """Writing to or reading from the renderer process failed."""


class RendererTimeoutError(RendererIOError):
    """The renderer did not finish within the configured timeout."""

    def __init__(self, executable: str, timeout: float):
        self.executable = executable
        self.timeout = timeout
        super().__init__(f"`{executable}` did not finish within {timeout:g}s and was killed")
