"""Tests for suiteconf.ui.output."""

from suiteconf.ui.output import GREEN, MAGENTA, RED, YELLOW, error, log, success, tagged, warn


class TestLogFunctions:
    def test_log(self, capsys):
        log("hello")
        assert "hello" in capsys.readouterr().out

    def test_success(self, capsys):
        success("done")
        out = capsys.readouterr().out
        assert "done" in out
        assert GREEN in out

    def test_warn(self, capsys):
        warn("careful")
        out = capsys.readouterr().out
        assert "careful" in out
        assert YELLOW in out

    def test_error(self, capsys):
        error("broke")
        out = capsys.readouterr().out
        assert "broke" in out
        assert RED in out

    def test_prefix(self, capsys):
        log("x")
        assert "[suiteconf]" in capsys.readouterr().out


class TestTagged:
    def test_default_tag(self):
        line = tagged(GREEN, "ok")
        assert line.startswith("\r\033[K")
        assert line.endswith("[suiteconf]\033[0m ok")

    def test_custom_tag(self):
        assert f"{MAGENTA}[debug]" in tagged(MAGENTA, "x", tag="debug")
