"""Rendering DOT descriptions to SVG with Graphviz."""

import logging
import os
import signal
import subprocess

from .errors import RendererIOError, RendererNotFoundError, RendererTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "dot"
DEFAULT_TIMEOUT = 30.0
OUTPUT_FLAG = "-Tsvg"


class GraphvizRenderer:
    """Runs the Graphviz `dot` tool over stdin/stdout.

    There is no pure-Python Graphviz layout engine, so rendering shells out.
    One attempt is made per call and any failure is raised.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout: float = DEFAULT_TIMEOUT):
        if timeout <= 0:
            raise ValueError(f"timeout must be > 0, got: {timeout}")
        self.executable = executable
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        return [self.executable, OUTPUT_FLAG]

    def render(self, dot: bytes) -> str:
        """Render DOT bytes and return the SVG document.

        Args:
            dot: Complete DOT description

        Returns:
            SVG text produced by the renderer

        Raises:
            RendererNotFoundError: If the executable cannot be started
            RendererTimeoutError: If the renderer runs longer than the timeout
            RendererIOError: On pipe errors, undecodable output or a failed exit
        """
        logger.debug(f"Running {' '.join(self.command)} on {len(dot)} bytes of DOT")
        try:
            process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                # Own process group, so helpers forked by the renderer can be killed too
                start_new_session=(os.name == "posix"),
            )
        except (FileNotFoundError, PermissionError) as e:
            raise RendererNotFoundError(self.executable, e.strerror or str(e)) from e
        except OSError as e:
            raise RendererNotFoundError(self.executable, str(e)) from e

        # Leaving the with block closes all pipes and waits for the child
        with process:
            try:
                # communicate() feeds stdin while draining stdout and stderr
                stdout, stderr = process.communicate(dot, timeout=self.timeout)
            except subprocess.TimeoutExpired as e:
                _kill(process)
                # Pipes are closed by the with block; do not wait for EOF
                process.wait()
                raise RendererTimeoutError(self.executable, self.timeout) from e
            except OSError as e:
                _kill(process)
                raise RendererIOError(f"I/O error while talking to `{self.executable}`: {e}") from e

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            message = f"`{self.executable}` exited with status {process.returncode}"
            raise RendererIOError(f"{message}: {detail}" if detail else message)

        try:
            svg = stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RendererIOError(f"`{self.executable}` produced output that is not valid UTF-8: {e}") from e

        logger.debug(f"Rendered {len(svg)} characters of SVG")
        return svg


def _kill(process: subprocess.Popen) -> None:
    """Kill the renderer and anything it started in its process group."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        process.kill()
