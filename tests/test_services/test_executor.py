"""Tests for SessionExecutor and outcome classification."""

import io
import subprocess

import pytest
from conftest import FakeProcess, SpawnRecorder

from stool.models import Invocation, OutcomeKind, Shell
from stool.services import SessionExecutor
from stool.services.executor import classify


def _invocation(argv=None) -> Invocation:
    return Invocation(
        argv=argv or ["ssh", "deploy@10.0.0.5"],
        operation=Shell(),
        display="deploy@10.0.0.5:22",
    )


class TestClassify:
    """Test outcome classification."""

    def test_success(self):
        """Exit 0 is success regardless of stderr."""
        outcome = classify(0, "Warning: Permanently added '10.0.0.5' to known hosts.")
        assert outcome.kind is OutcomeKind.SUCCESS
        assert outcome.message == ""

    @pytest.mark.parametrize(
        "stderr",
        [
            "deploy@10.0.0.5: Permission denied (publickey,password).",
            "Permission denied, please try again.",
            "Permission denied",
            "deploy@10.0.0.5: Permission denied.",
            "permission denied",
            "Received disconnect: Too many authentication failures",
        ],
    )
    def test_auth_failure(self, stderr):
        """ssh authentication errors are auth failures."""
        assert classify(255, stderr).kind is OutcomeKind.AUTH_FAILURE

    @pytest.mark.parametrize(
        "stderr",
        [
            "ssh: connect to host 10.0.0.5 port 22: Connection timed out",
            "ssh: connect to host 10.0.0.5 port 22: Connection refused",
            "ssh: connect to host 10.0.0.5 port 22: No route to host",
            "ssh: Could not resolve hostname nohost: Name or service not known",
            "Connection closed by 10.0.0.5 port 22",
        ],
    )
    def test_connection_failure(self, stderr):
        """Network errors are connection failures."""
        assert classify(255, stderr).kind is OutcomeKind.CONNECTION_FAILURE

    def test_remote_command_failure(self):
        """Other non-zero exits are other failures."""
        outcome = classify(1, "")
        assert outcome.kind is OutcomeKind.OTHER_FAILURE
        assert outcome.returncode == 1

    def test_scp_file_error_does_not_hide_auth_failure(self):
        """An ssh rejection still counts next to a remote file error."""
        stderr = "scp: /root/x: Permission denied\ndeploy@10.0.0.5: Permission denied (password).\n"
        assert classify(1, stderr).kind is OutcomeKind.AUTH_FAILURE

    def test_scp_permission_denied_is_not_auth(self):
        """A remote file permission error is not an authentication failure."""
        outcome = classify(1, "scp: /root/secret.txt: Permission denied\n")
        assert outcome.kind is OutcomeKind.OTHER_FAILURE
        assert outcome.message == "scp: /root/secret.txt: Permission denied"


class TestSessionExecutor:
    """Test running invocations."""

    def test_spawns_argv_with_piped_stderr(self):
        """The exact argv is spawned; only stderr is captured."""
        spawn = SpawnRecorder()
        outcome = SessionExecutor(spawn=spawn, relay=io.StringIO()).run(_invocation())

        assert outcome.kind is OutcomeKind.SUCCESS
        assert spawn.calls == [["ssh", "deploy@10.0.0.5"]]
        assert spawn.kwargs[0]["stderr"] is subprocess.PIPE
        assert "stdin" not in spawn.kwargs[0]
        assert "stdout" not in spawn.kwargs[0]

    def test_relays_stderr(self):
        """Captured stderr is echoed to the operator."""
        relay = io.StringIO()
        spawn = SpawnRecorder(returncode=255, stderr="line one\nConnection refused\n")

        outcome = SessionExecutor(spawn=spawn, relay=relay).run(_invocation())

        assert relay.getvalue() == "line one\nConnection refused\n"
        assert outcome.kind is OutcomeKind.CONNECTION_FAILURE
        assert outcome.returncode == 255

    def test_tail_limits_diagnostic(self):
        """Only the last lines are kept for classification."""
        stderr = "Permission denied (publickey).\n" + "noise\n" * 5
        spawn = SpawnRecorder(returncode=255, stderr=stderr)

        outcome = SessionExecutor(spawn=spawn, relay=io.StringIO(), tail_lines=3).run(
            _invocation()
        )

        assert outcome.kind is OutcomeKind.OTHER_FAILURE
        assert outcome.message == "noise\nnoise\nnoise"

    def test_missing_program(self):
        """A program that cannot be started is reported as missing."""

        def spawn(args, **kwargs):
            raise FileNotFoundError(args[0])

        outcome = SessionExecutor(spawn=spawn).run(_invocation(["nossh", "x@y"]))

        assert outcome.kind is OutcomeKind.TOOL_MISSING
        assert "nossh" in outcome.message

    def test_interrupt_is_cancel(self):
        """Ctrl-C while waiting reports a cancelled session."""

        class InterruptedProcess(FakeProcess):
            def __init__(self):
                super().__init__(returncode=130)
                self.waits = 0

            def wait(self, timeout=None):
                self.waits += 1
                if self.waits == 1:
                    raise KeyboardInterrupt
                return self.returncode

        process = InterruptedProcess()
        outcome = SessionExecutor(spawn=lambda args, **kw: process, relay=io.StringIO()).run(
            _invocation()
        )

        assert outcome.kind is OutcomeKind.USER_CANCELLED
        assert outcome.ok
        assert process.waits == 2

    def test_logged_command_hides_script(self, caplog: pytest.LogCaptureFixture):
        """The log line shows the redacted command line."""
        from stool.models import AutomationScript

        invocation = Invocation(
            argv=["expect", "-c", 'send -- "secret123\\r"'],
            operation=Shell(),
            display="deploy@10.0.0.5:22",
            script=AutomationScript(
                text='send -- "secret123\\r"',
                spawn_argv=["ssh", "deploy@10.0.0.5"],
                host_key_pattern="",
                password_pattern="",
            ),
        )
        with caplog.at_level("INFO", logger="stool.services.executor"):
            SessionExecutor(spawn=SpawnRecorder(), relay=io.StringIO()).run(invocation)

        assert "secret123" not in caplog.text
        assert "expect -c <script: ssh deploy@10.0.0.5>" in caplog.text
