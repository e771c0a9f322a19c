"""Unit tests for the Graphviz renderer."""

import shutil
import time

import pytest

from crategraph.errors import (
    RenderError,
    RendererIOError,
    RendererNotFoundError,
    RendererTimeoutError,
)
from crategraph.render import GraphvizRenderer

SAMPLE_DOT = b'digraph crate_graph {\n    app_0 [label="app"];\n}\n'


class TestGraphvizRenderer:
    """Test GraphvizRenderer against stand-in executables."""

    def test_command(self):
        renderer = GraphvizRenderer()
        assert renderer.command == ["dot", "-Tsvg"]
        assert renderer.timeout == 30.0

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="timeout"):
            GraphvizRenderer(timeout=0)

    def test_missing_executable(self):
        """A missing tool is reported as not found, never as an I/O error."""
        renderer = GraphvizRenderer(executable="crategraph-no-such-dot-binary")
        with pytest.raises(RendererNotFoundError) as exc_info:
            renderer.render(SAMPLE_DOT)

        error = exc_info.value
        assert not isinstance(error, RendererIOError)
        assert error.executable == "crategraph-no-such-dot-binary"
        assert "failed to spawn `crategraph-no-such-dot-binary`" in str(error)
        assert "Graphviz" in error.hint

    def test_non_executable_file(self, fake_renderer):
        script = fake_renderer("cat", name="dot")
        script.chmod(0o644)
        with pytest.raises(RendererNotFoundError):
            GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT)

    def test_output_returned(self, fake_renderer):
        script = fake_renderer("cat")
        assert GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT) == SAMPLE_DOT.decode("utf-8")

    def test_output_format_argument(self, fake_renderer):
        script = fake_renderer('cat > /dev/null; printf "%s" "$1"')
        assert GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT) == "-Tsvg"

    def test_large_input_does_not_deadlock(self, fake_renderer):
        """Input and output far larger than a pipe buffer pass through."""
        script = fake_renderer("cat")
        payload = b"    n [label=\"x\"];\n" * 200_000
        svg = GraphvizRenderer(executable=str(script), timeout=60).render(payload)
        assert len(svg) == len(payload)

    def test_child_ignoring_input(self, fake_renderer):
        script = fake_renderer('printf "<svg/>"')
        assert GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT * 10_000) == "<svg/>"

    def test_nonzero_exit(self, fake_renderer):
        script = fake_renderer("cat > /dev/null; echo 'syntax error in line 1' >&2; exit 3")
        with pytest.raises(RendererIOError, match="exited with status 3: syntax error in line 1"):
            GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT)

    def test_invalid_utf8_output(self, fake_renderer):
        script = fake_renderer("cat > /dev/null; printf '\\377\\376'")
        with pytest.raises(RendererIOError, match="not valid UTF-8"):
            GraphvizRenderer(executable=str(script)).render(SAMPLE_DOT)

    def test_timeout_kills_renderer(self, fake_renderer):
        script = fake_renderer("exec sleep 30")
        renderer = GraphvizRenderer(executable=str(script), timeout=0.5)
        with pytest.raises(RendererTimeoutError) as exc_info:
            renderer.render(SAMPLE_DOT)
        assert isinstance(exc_info.value, RendererIOError)
        assert "0.5s" in str(exc_info.value)

    def test_timeout_kills_forked_helpers(self, fake_renderer):
        """A renderer whose child keeps the pipes open still times out promptly."""
        script = fake_renderer("sleep 5")
        renderer = GraphvizRenderer(executable=str(script), timeout=0.5)
        started = time.monotonic()
        with pytest.raises(RendererTimeoutError):
            renderer.render(SAMPLE_DOT)
        assert time.monotonic() - started < 2

    def test_error_hierarchy(self):
        assert issubclass(RendererNotFoundError, RenderError)
        assert issubclass(RendererIOError, RenderError)
        assert issubclass(RendererTimeoutError, RendererIOError)


@pytest.mark.skipif(shutil.which("dot") is None, reason="Graphviz is not installed")
class TestRealGraphviz:
    """Test against the real dot tool when it is available."""

    def test_renders_svg(self):
        svg = GraphvizRenderer().render(b"digraph crate_graph { app_0 -> util_1; }\n")
        assert "<svg" in svg
        assert "app_0" in svg

    def test_syntax_error_is_io_error(self):
        with pytest.raises(RendererIOError):
            GraphvizRenderer().render(b"digraph {{{ nonsense")
